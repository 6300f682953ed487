# sponsor_hub/api/survey_routes.py
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sponsor_hub.auth.deps import get_confirmed_user, require_permission
from sponsor_hub.crud import surveys as survey_store
from sponsor_hub.db.session import get_db
from sponsor_hub.models.survey import Survey
from sponsor_hub.models.user import User, UserPermissions
from sponsor_hub.schemas.common import ActionResponse, RowId
from sponsor_hub.schemas.survey import SurveyIn, SurveyOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/surveys", tags=["Survey"])


def load_survey_or_404(survey_id: int, db: Session) -> Survey:
    survey = survey_store.load_survey(db, survey_id)
    if survey is None:
        raise HTTPException(status_code=404, detail="Survey not found")
    return survey


def ensure_can_read(survey: Survey, caller: User) -> None:
    """Owners read their own survey; editors and admins read any."""
    if survey.user_id != caller.id and not caller.has_permission(UserPermissions.EDITOR):
        raise HTTPException(status_code=403, detail="Attempt to load someone else's survey")


def ensure_can_write(survey: Survey, caller: User) -> None:
    """Only the owner, or an admin, changes a survey."""
    if survey.user_id != caller.id and not caller.has_permission(UserPermissions.ADMIN):
        logger.warning(
            "user %s tried to modify survey %s", caller.id, survey.id,
            extra={"user_id": caller.id, "survey_id": survey.id},
        )
        raise HTTPException(status_code=403, detail="Attempt to update someone else's survey")


@router.get("", response_model=List[SurveyOut], summary="List all surveys (editors)")
def surveys_list(
    caller: User = Depends(require_permission(UserPermissions.EDITOR)),
    db: Session = Depends(get_db),
):
    return survey_store.list_surveys(db)


@router.get("/{survey_id}", response_model=SurveyOut)
def load_survey(
    survey_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    """``survey_id`` 0 loads the caller's own survey"""
    if survey_id == 0:
        survey = survey_store.load_survey_for_user(db, caller.id)
        if survey is None:
            raise HTTPException(status_code=404, detail="Survey not found")
        return survey
    survey = load_survey_or_404(survey_id, db)
    ensure_can_read(survey, caller)
    return survey


@router.post("", response_model=ActionResponse, status_code=201)
def add_survey(
    survey_in: SurveyIn,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = survey_store.apply_survey_fields(Survey(user_id=caller.id), survey_in)
    survey_id = survey_store.insert_survey(db, survey)
    logger.info("survey %s created", survey_id, extra={"user_id": caller.id, "survey_id": survey_id})
    return ActionResponse(
        status=status.HTTP_201_CREATED,
        message="Survey created successfully",
        resource_id=survey_id,
    )


@router.put("/{survey_id}", response_model=ActionResponse)
def update_survey(
    survey_id: RowId,
    survey_in: SurveyIn,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = load_survey_or_404(survey_id, db)
    ensure_can_write(survey, caller)
    survey_store.apply_survey_fields(survey, survey_in)
    resource_id = survey_store.update_survey(db, survey)
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="Survey updated successfully",
        resource_id=resource_id,
    )


@router.delete("/{survey_id}", response_model=ActionResponse)
def delete_survey(
    survey_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = load_survey_or_404(survey_id, db)
    ensure_can_write(survey, caller)
    survey_store.delete_survey(db, survey)
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="Survey deleted successfully",
        resource_id=survey_id,
    )
