# sponsor_hub/api/sponsor_routes.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sponsor_hub.api.survey_routes import ensure_can_read, ensure_can_write, load_survey_or_404
from sponsor_hub.auth.deps import get_confirmed_user
from sponsor_hub.crud import sponsors as sponsor_store
from sponsor_hub.crud import users as user_store
from sponsor_hub.db.session import get_db
from sponsor_hub.models.survey import SurveySponsor
from sponsor_hub.models.user import User
from sponsor_hub.schemas.common import ActionResponse, RowId
from sponsor_hub.schemas.survey import SponsorIn, SurveySponsorOut
from sponsor_hub.schemas.user import SponsorableUser

router = APIRouter(tags=["Sponsors"])


@router.get("/sponsors", response_model=List[SponsorableUser])
def sponsorable_users(
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    return sponsor_store.list_sponsorable_users(db)


@router.get("/surveys/{survey_id}/sponsors", response_model=List[SurveySponsorOut])
def survey_sponsors(
    survey_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = load_survey_or_404(survey_id, db)
    ensure_can_read(survey, caller)
    return sponsor_store.sponsors_for_survey_id(db, survey.id)


@router.post("/surveys/{survey_id}/sponsors", response_model=ActionResponse, status_code=201)
def add_survey_sponsor(
    survey_id: RowId,
    body: SponsorIn,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = load_survey_or_404(survey_id, db)
    ensure_can_write(survey, caller)

    sponsor = user_store.get_user(db, body.user_id)
    if sponsor is None:
        raise HTTPException(status_code=404, detail="User not found")
    if not sponsor_store.is_sponsorable(sponsor):
        raise HTTPException(status_code=400, detail="User cannot sponsor surveys")

    sponsor_id = sponsor_store.insert_survey_sponsor(
        db, SurveySponsor(survey_id=survey.id, user_id=sponsor.id)
    )
    return ActionResponse(
        status=status.HTTP_201_CREATED,
        message="Sponsor added successfully",
        resource_id=sponsor_id,
    )


@router.delete("/surveys/{survey_id}/sponsors/{user_id}", response_model=ActionResponse)
def remove_survey_sponsor(
    survey_id: RowId,
    user_id: RowId,
    caller: User = Depends(get_confirmed_user),
    db: Session = Depends(get_db),
):
    survey = load_survey_or_404(survey_id, db)
    ensure_can_write(survey, caller)
    if not sponsor_store.delete_survey_sponsor(db, survey.id, user_id):
        raise HTTPException(status_code=404, detail="Sponsor not found")
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="Sponsor removed successfully",
        resource_id=survey.id,
    )
