# sponsor_hub/schemas/survey.py
from pydantic import BaseModel, ConfigDict, Field
from sponsor_hub.schemas.common import MAX_ROW_ID, PosixDateTime

class SurveyIn(BaseModel):
    """Editable survey fields. Anything else in the body (owner, id) is ignored."""
    name: str = Field(default="", max_length=255)
    github_id: str = Field(default="", max_length=255)
    priorities: str = ""
    issues: str = ""
    comms_frequency: str = Field(default="", max_length=255)
    pre_release: bool = False
    privacy: str = Field(default="", max_length=255)

class SurveyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    github_id: str
    priorities: str
    issues: str
    comms_frequency: str
    pre_release: bool
    privacy: str
    created_at: PosixDateTime = None
    updated_at: PosixDateTime = None

class SponsorIn(BaseModel):
    user_id: int = Field(ge=1, le=MAX_ROW_ID)

class SurveySponsorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    survey_id: int
    user_id: int
    created_at: PosixDateTime = None
