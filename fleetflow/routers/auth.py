from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fleetflow.auth.auth_bearer import JWTBearer
from fleetflow.auth.auth_handler import AuthSession, sign_jwt
from fleetflow.auth.passwords_handler import hash_password_async, verify_password_async
from fleetflow.core.db import get_db
from fleetflow.middleware.rate_limit import AUTH_RATE_LIMIT, limiter
from fleetflow.models.user import User
from fleetflow.schemas.user import (
    LoginResponse,
    RegisterResponse,
    SessionOut,
    UserLoginSchema,
    UserOut,
    UserSchema,
)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid Username or Password"


@router.post("/register", response_model=RegisterResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def register_user(request: Request, user: UserSchema, db: AsyncSession = Depends(get_db)):
    # Verify if username or email is taken
    existing_user = (await db.execute(
        select(User).where(or_(User.username == user.username, User.email == user.email))
    )).scalars().first()

    if existing_user:
        raise HTTPException(status_code=400, detail="Username or Email already exists!")

    if not user.username or not user.password:
        raise HTTPException(status_code=400, detail="Missing user information.")

    hashed_password = await hash_password_async(user.password)

    new_user = User(
        first_name=user.first_name,
        last_name=user.last_name,
        username=user.username,
        email=user.email,
        mobile=user.mobile,
        address=user.address,
        password=hashed_password,
    )
    db.add(new_user)

    try:
        await db.commit()
    except IntegrityError:
        # handle race where another request created the same username/email
        await db.rollback()
        raise HTTPException(status_code=400, detail="Username or Email already exists!")

    return RegisterResponse(message="Registration successful!", user=UserOut.model_validate(new_user))


@router.post("/login", response_model=LoginResponse)
@limiter.limit(AUTH_RATE_LIMIT)
async def login_user(request: Request, user: UserLoginSchema, db: AsyncSession = Depends(get_db)):
    existing_user = (await db.execute(select(User).where(User.username == user.username))).scalar_one_or_none()
    if not existing_user:
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    password_valid = await verify_password_async(user.password, existing_user.password)
    if not password_valid:
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    token = sign_jwt(existing_user.id, existing_user.username)
    return LoginResponse(
        message="Login successful!",
        user=UserOut.model_validate(existing_user),
        access_token=token["access_token"],
    )


@router.get("/me", response_model=SessionOut)
async def current_session(session: AuthSession = Depends(JWTBearer())):
    return SessionOut(user_id=session.user_id, username=session.username, expires_at=session.expires_at)
