# sponsor_hub/schemas/user.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from sponsor_hub.models.user import UserPermissions
from sponsor_hub.schemas.common import PosixDateTime


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=4, max_length=72)
    password_confirmation: str
    name: str = Field(default="", max_length=255)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("Password and confirmation do not match")
        return self


class UserUpdate(BaseModel):
    name: str = Field(default="", max_length=255)
    email: EmailStr


class PermissionsUpdate(BaseModel):
    permissions: UserPermissions


class PublicUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: PosixDateTime = None
    updated_at: PosixDateTime = None


class PrivilegedUser(PublicUser):
    email: str
    confirmed: bool
    permissions: UserPermissions


class SponsorableUser(BaseModel):
    id: int
    name: str
    github_id: str
