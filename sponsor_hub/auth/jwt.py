# sponsor_hub/auth/jwt.py
import base64
import binascii
import secrets
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from sponsor_hub.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
ALGORITHM = "HS256"
IDENTITY_CLAIM = "id"


class InvalidTokenError(Exception):
    pass


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    expire_delta = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": str(user_id),
        IDENTITY_CLAIM: user_id,
        "exp": datetime.now(tz=timezone.utc) + timedelta(minutes=expire_delta),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_identity(token: str) -> int:
    """Return the numeric identity claim of a valid token."""
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
    identity = claims.get(IDENTITY_CLAIM)
    # bool is an int subclass; reject it along with floats and strings
    if not isinstance(identity, int) or isinstance(identity, bool) or identity <= 0:
        raise InvalidTokenError("token carries no numeric identity claim")
    return identity


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def new_confirmation_code() -> tuple[str, str]:
    """Return (code, verifier). Only the verifier is stored."""
    code = secrets.token_urlsafe(24)
    return code, pwd_context.hash(code)


def encode_verification(code: str) -> str:
    return base64.b64encode(code.encode()).decode()


def verify_confirmation(verification: str, verifier: str | None) -> bool:
    """Check a base64 encoded confirmation code against the stored verifier."""
    if not verifier:
        return False
    try:
        code = base64.b64decode(verification, validate=True).decode()
    except (binascii.Error, UnicodeDecodeError):
        return False
    return pwd_context.verify(code, verifier)
