import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsor_hub.core.errors import DuplicateError
from sponsor_hub.models.survey import Survey, SurveySponsor
from sponsor_hub.schemas.survey import SurveyIn

logger = logging.getLogger(__name__)

LIST_LIMIT = 200


def apply_survey_fields(survey: Survey, survey_in: SurveyIn) -> Survey:
    """Overwrite every editable field; the owner is never taken from input."""
    survey.name = survey_in.name
    survey.github_id = survey_in.github_id
    survey.priorities = survey_in.priorities
    survey.issues = survey_in.issues
    survey.comms_frequency = survey_in.comms_frequency
    survey.pre_release = survey_in.pre_release
    survey.privacy = survey_in.privacy
    return survey


def insert_survey(db: Session, survey: Survey) -> int:
    db.add(survey)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("user %s already has a survey", survey.user_id)
        raise DuplicateError("User already has a survey")
    db.refresh(survey)
    return survey.id


def update_survey(db: Session, survey: Survey) -> int:
    db.add(survey)
    db.commit()
    db.refresh(survey)
    return survey.id


def load_survey(db: Session, survey_id: int) -> Survey | None:
    return db.get(Survey, survey_id)


def load_survey_for_user(db: Session, user_id: int) -> Survey | None:
    return db.execute(
        select(Survey).where(Survey.user_id == user_id)
    ).scalars().first()


def list_surveys(db: Session) -> list[Survey]:
    return list(db.execute(
        select(Survey).order_by(Survey.name, Survey.id).limit(LIST_LIMIT)
    ).scalars().all())


def list_surveys_for_user_id(db: Session, user_id: int) -> list[Survey]:
    """Surveys the given user sponsors."""
    sponsored = select(SurveySponsor.survey_id).where(SurveySponsor.user_id == user_id)
    return list(db.execute(
        select(Survey)
        .where(Survey.id.in_(sponsored))
        .order_by(Survey.name, Survey.id)
        .limit(LIST_LIMIT)
    ).scalars().all())


def delete_survey(db: Session, survey: Survey) -> None:
    db.delete(survey)
    db.commit()
