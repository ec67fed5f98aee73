# skillup/auth/auth_utils.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, HTTPException
from jose import JWTError, jwt

from skillup import config

logger = logging.getLogger(__name__)

# Claims are caller-chosen at /jwt; only signature and exp are checked
DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign the caller-supplied claims; exp is always set server-side"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=config.TOKEN_EXPIRE_DAYS))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.ACCESS_TOKEN_SECRET, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, config.ACCESS_TOKEN_SECRET, algorithms=[config.ALGORITHM], options=DECODE_OPTIONS)
    except JWTError:
        raise HTTPException(status_code=401, detail="unauthorized access")


def cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": config.IS_PRODUCTION,
        "samesite": "none" if config.IS_PRODUCTION else "strict",
    }


def verify_token(token: Optional[str] = Cookie(None)) -> dict:
    """
    Dependency for protected routes.
    Reads the `token` cookie and returns the decoded claims.
    """
    if not token:
        raise HTTPException(status_code=401, detail="unauthorized access")
    return decode_access_token(token)
