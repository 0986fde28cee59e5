import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

import jwt

from fleetflow.core.environment import get_jwt_algorithm, get_jwt_exp_delta_seconds, get_jwt_secret


@dataclass(frozen=True)
class AuthSession:
    """Who is calling, decoded from the bearer token and handed to handlers per request."""
    user_id: int
    username: str
    expires: float

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expires, tz=timezone.utc)


def token_response(token: str):
    return {
        "access_token": token
    }


def sign_jwt(user_id: int, username: str) -> Dict[str, str]:
    """Generate a JWT token for a given user."""
    payload = {
        "user_id": user_id,
        "username": username,
        "expires": time.time() + get_jwt_exp_delta_seconds()
    }
    token = jwt.encode(payload, get_jwt_secret(), algorithm=get_jwt_algorithm())
    return token_response(token)


def decode_jwt(token: str) -> Optional[dict]:
    """Decode a JWT token and return the payload if valid, else None."""
    try:
        decoded_token = jwt.decode(token, get_jwt_secret(), algorithms=[get_jwt_algorithm()])
    except jwt.InvalidTokenError:
        return None
    if decoded_token.get("expires", 0) < time.time():
        return None
    return decoded_token


def session_from_token(token: str) -> Optional[AuthSession]:
    payload = decode_jwt(token)
    if not payload or "user_id" not in payload:
        return None
    return AuthSession(
        user_id=payload["user_id"],
        username=payload.get("username", ""),
        expires=payload["expires"],
    )
