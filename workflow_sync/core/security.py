"""Bearer token verification for the workflow API."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from workflow_sync.config import settings

logger = logging.getLogger(__name__)

AUTH_SCHEME = HTTPBearer(auto_error=False)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret_key() -> str:
    return settings.secret_key.get_secret_value()


def create_access_token(
    subject: str,
    extra: Dict[str, Any] | None = None,
    ttl: timedelta | None = None,
) -> str:
    """Mint a token the way the identity provider would. Used by dev tooling and tests."""
    issued = now_utc()
    payload: Dict[str, Any] = {
        "sub": subject,
        "iat": int(issued.timestamp()),
        "exp": int(
            (issued + (ttl or timedelta(minutes=settings.access_token_ttl_minutes))).timestamp()
        ),
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    if extra:
        payload.update(extra)
    return jwt.encode(payload, _secret_key(), algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    options = {"require": ["exp", "sub"]}
    return jwt.decode(
        token,
        _secret_key(),
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options=options,
    )


def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(AUTH_SCHEME),
) -> Dict[str, Any]:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_token(creds.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.PyJWTError as exc:
        logger.warning("Rejected bearer token: %s", exc.__class__.__name__)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = str(payload.get("sub", "")).strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token subject",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"sub": subject, "name": payload.get("name")}
