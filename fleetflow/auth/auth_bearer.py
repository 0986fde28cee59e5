from fastapi import HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fleetflow.auth.auth_handler import AuthSession, session_from_token


class JWTBearer(HTTPBearer):
    """FastAPI dependency resolving the Authorization header into an AuthSession."""

    def __init__(self, auto_error: bool = True):
        super().__init__(auto_error=auto_error)

    async def __call__(self, request: Request) -> AuthSession:
        credentials: HTTPAuthorizationCredentials = await super().__call__(request)
        if not credentials:
            raise HTTPException(status_code=401, detail="Missing or invalid authorization header")
        if credentials.scheme != "Bearer":
            raise HTTPException(status_code=401, detail="Invalid authentication scheme.")

        session = session_from_token(credentials.credentials)
        if session is None:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        return session
