# sponsor_hub/auth/deps.py
"""Request dependencies that stand in for auth and permission middleware.

Every protected route depends on ``get_confirmed_user``: the bearer token must
decode to a numeric ``id`` claim, that user must still exist, and their e-mail
address must be confirmed. Routes gated on a tier add ``require_permission``.
"""
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from sponsor_hub.auth.jwt import InvalidTokenError, decode_identity
from sponsor_hub.crud import users as user_store
from sponsor_hub.db.session import get_db
from sponsor_hub.models.user import User, UserPermissions

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

_TIER_NAMES = {
    UserPermissions.USER: "a user",
    UserPermissions.EDITOR: "an editor",
    UserPermissions.ADMIN: "an admin",
}


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    try:
        return decode_identity(token)
    except InvalidTokenError as exc:
        logger.info("rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = user_store.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def get_confirmed_user(user: User = Depends(get_current_user)) -> User:
    if not user.confirmed:
        raise HTTPException(status_code=403, detail="E-mail address not confirmed")
    return user


def require_permission(required: UserPermissions):
    """Dependency factory: 403 unless the caller is at least ``required``."""

    def _check(user: User = Depends(get_confirmed_user)) -> User:
        if not user.has_permission(required):
            raise HTTPException(
                status_code=403,
                detail=f"User is not {_TIER_NAMES[required]}",
            )
        return user

    return _check
