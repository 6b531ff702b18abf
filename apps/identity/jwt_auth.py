"""
JWT utilities for the Task Manager API.

Tokens are sent by the client as `Authorization: Bearer <token>` and carry
the user id as `sub`.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from django.conf import settings


JWT_ALGORITHM = 'HS256'
ACCESS_TOKEN_TYPE = 'access'


def _secret() -> str:
    return settings.JWT_SECRET


def create_access_token(user_id: UUID, role: str) -> str:
    """
    Create an access token for `user_id`.

    Expires after JWT_EXPIRES_IN_DAYS days.
    """
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'role': role,
        'exp': now + timedelta(days=settings.JWT_EXPIRES_IN_DAYS),
        'iat': now,
        'type': ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """
    Extract user_id from a valid access token.

    Returns:
        UUID of user if token valid, None otherwise.
    """
    payload = decode_token(token)
    if not payload or payload.get('type') != ACCESS_TOKEN_TYPE or 'sub' not in payload:
        return None
    try:
        return UUID(payload['sub'])
    except (TypeError, ValueError):
        return None
