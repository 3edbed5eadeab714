from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from pydantic import ValidationError

from src.auth.claims import SessionClaims
from src.config import settings

_RESERVED = ("sub", "type", "exp", "iat")


def create_session_token(claims: SessionClaims, expires_minutes: int | None = None) -> str:
    """Sign session claims into a JWT with a fixed expiry."""
    now = datetime.now(timezone.utc)
    minutes = settings.jwt_expiration_minutes if expires_minutes is None else expires_minutes
    payload = claims.model_dump(mode="json")
    payload.update(
        {
            "sub": claims.principal_id,
            "type": "session",
            "exp": now + timedelta(minutes=minutes),
            "iat": now,
        }
    )
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionClaims | None:
    """Verify signature and expiry. Returns the claims or None if the token is unusable."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != "session":
        return None
    if payload.get("sub") != payload.get("principal_id"):
        return None
    try:
        return SessionClaims.model_validate(
            {k: v for k, v in payload.items() if k not in _RESERVED}
        )
    except ValidationError:
        return None
