# sponsor_hub/api/routes.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from sponsor_hub.auth.jwt import (
    create_access_token,
    get_password_hash,
    new_confirmation_code,
    verify_confirmation,
    verify_password,
)
from sponsor_hub.core.config import settings
from sponsor_hub.core.errors import DuplicateError
from sponsor_hub.crud import users as user_store
from sponsor_hub.db.session import get_db
from sponsor_hub.models.user import User
from sponsor_hub.schemas.auth import Token
from sponsor_hub.schemas.common import ActionResponse
from sponsor_hub.schemas.user import RegisterIn

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/")
def api_root():
    return {"message": "root of the API does nothing, next?"}

@router.get("/health")
def health():
    return {"status": "ok"}

@router.post("/auth/register", response_model=ActionResponse, tags=["Auth"])
def register(user_in: RegisterIn, db: Session = Depends(get_db)):
    """Create an unconfirmed user and issue an e-mail confirmation code"""
    if user_store.find_user(db, user_in.email) is not None:
        raise HTTPException(status_code=400, detail="Email already registered")

    code, verifier = new_confirmation_code()
    user = User(
        email=user_in.email,
        name=user_in.name,
        password=get_password_hash(user_in.password),
        confirm_verifier=verifier,
        confirmed=False,
    )
    try:
        user_id = user_store.insert_user(db, user)
    except DuplicateError:
        # lost a race with a concurrent registration
        raise HTTPException(status_code=400, detail="Email already registered")

    # No mail transport here; the code is only visible in debug logs
    logger.debug("confirmation code for user %s: %s", user_id, code)
    logger.info("registered user %s", user_id)
    return ActionResponse(
        status=status.HTTP_200_OK,
        message="User registered, confirm the e-mail address to continue",
        resource_id=user_id,
    )

@router.get("/auth/confirm_email", tags=["Auth"])
def confirm_email(
    email: str = Query(...),
    verification: str = Query(...),
    db: Session = Depends(get_db),
):
    """Confirm an e-mail address with the base64 encoded code, then redirect"""
    user = user_store.find_user(db, email)
    if user is None or not verify_confirmation(verification, user.confirm_verifier):
        raise HTTPException(status_code=400, detail="Invalid confirmation")

    user.confirmed = True
    user.confirm_verifier = None
    user_store.update_user(db, user)
    logger.info("user %s confirmed their e-mail address", user.id)
    return RedirectResponse(
        url=settings.CONFIRM_REDIRECT_URL,
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )

@router.post("/auth/login", response_model=Token, tags=["Auth"])
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Authenticate user and return JWT"""
    user = user_store.find_user(db, form_data.username)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if user_store.is_locked(user):
        logger.warning("login attempt on locked user %s", user.id)
        raise HTTPException(status_code=401, detail="Account locked, try again later")

    if not verify_password(form_data.password, user.password):
        user_store.record_failed_login(
            db, user, settings.LOGIN_MAX_ATTEMPTS, settings.LOGIN_LOCK_MINUTES
        )
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_store.record_successful_login(db, user)
    token = create_access_token(user.id)
    return {"access_token": token, "token_type": "bearer"}
