import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsor_hub.core.errors import DuplicateError
from sponsor_hub.crud.surveys import LIST_LIMIT, load_survey_for_user
from sponsor_hub.models.survey import SurveySponsor
from sponsor_hub.models.user import User, UserPermissions
from sponsor_hub.schemas.user import SponsorableUser

logger = logging.getLogger(__name__)


def is_sponsorable(user: User) -> bool:
    return user.has_permission(UserPermissions.EDITOR)


def list_sponsorable_users(db: Session) -> list[SponsorableUser]:
    """Editors and admins, shown under their survey name when they have one."""
    users = db.execute(
        select(User)
        .where(User.permissions >= int(UserPermissions.EDITOR))
        .order_by(User.name, User.id)
        .limit(LIST_LIMIT)
    ).scalars().all()

    sponsorable = []
    for user in users:
        survey = load_survey_for_user(db, user.id)
        if survey is None:
            sponsorable.append(SponsorableUser(id=user.id, name=user.name, github_id=""))
        else:
            sponsorable.append(
                SponsorableUser(id=user.id, name=survey.name, github_id=survey.github_id)
            )
    return sponsorable


def insert_survey_sponsor(db: Session, sponsor: SurveySponsor) -> int:
    db.add(sponsor)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError("User already sponsors this survey")
    db.refresh(sponsor)
    logger.info("user %s now sponsors survey %s", sponsor.user_id, sponsor.survey_id)
    return sponsor.id


def sponsors_for_survey_id(db: Session, survey_id: int) -> list[SurveySponsor]:
    return list(db.execute(
        select(SurveySponsor)
        .where(SurveySponsor.survey_id == survey_id)
        .order_by(SurveySponsor.id)
    ).scalars().all())


def delete_survey_sponsor(db: Session, survey_id: int, user_id: int) -> bool:
    result = db.execute(
        delete(SurveySponsor).where(
            SurveySponsor.survey_id == survey_id,
            SurveySponsor.user_id == user_id,
        )
    )
    db.commit()
    return result.rowcount > 0
