import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsor_hub.core.errors import DuplicateError, NotFoundError, OwnershipError
from sponsor_hub.models.user import User, UserPermissions
from sponsor_hub.schemas.user import PublicUser, PrivilegedUser

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # DateTime columns hold naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _commit_user(db: Session, user: User) -> int:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("duplicate e-mail rejected")
        raise DuplicateError("E-mail address already registered")
    db.refresh(user)
    return user.id


def normalize_email(email: str) -> str:
    """Addresses are stored and looked up lower-cased."""
    return email.strip().lower()


def insert_user(db: Session, user: User) -> int:
    user.email = normalize_email(user.email)
    db.add(user)
    return _commit_user(db, user)


def update_user(db: Session, user: User) -> int:
    user.email = normalize_email(user.email)
    db.add(user)
    return _commit_user(db, user)


def find_user(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == normalize_email(email))).scalars().first()


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def purge_user(db: Session, email: str) -> None:
    """Hard delete; the user's survey and sponsorships go with it."""
    user = find_user(db, email)
    if user is not None:
        db.delete(user)
        db.commit()


def load_public_user(db: Session, user_id: int) -> PublicUser:
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return PublicUser.model_validate(user)


def load_user_as_self(db: Session, user_id: int, logged_in_user_id: int) -> User:
    if user_id != logged_in_user_id:
        raise OwnershipError("Cannot load other users")
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def load_privileged_user_as_self(
    db: Session, user_id: int, logged_in_user_id: int
) -> PrivilegedUser:
    return PrivilegedUser.model_validate(
        load_user_as_self(db, user_id, logged_in_user_id)
    )


def set_permissions(db: Session, user: User, permissions: UserPermissions) -> int:
    user.permissions = int(permissions)
    logger.info("user %s permissions set to %s", user.id, permissions.name)
    return update_user(db, user)


def is_locked(user: User, now: datetime | None = None) -> bool:
    now = now or _utcnow()
    return user.locked is not None and user.locked > now


def record_failed_login(
    db: Session, user: User, max_attempts: int, lock_minutes: int
) -> None:
    """Count a bad password; lock the account once ``max_attempts`` is reached."""
    now = _utcnow()
    user.attempt_count += 1
    user.last_attempt = now
    if user.attempt_count >= max_attempts:
        user.locked = now + timedelta(minutes=lock_minutes)
        user.attempt_count = 0
        logger.warning("user %s locked until %s", user.id, user.locked.isoformat())
    db.commit()


def record_successful_login(db: Session, user: User) -> None:
    user.attempt_count = 0
    user.last_attempt = _utcnow()
    user.locked = None
    db.commit()
