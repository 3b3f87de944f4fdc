"""
Account endpoints: sign up and exchange credentials for a bearer token.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.db.session import get_db
from softouch.schemas.user import Token, UserCreate, UserLogin, UserResponse
from softouch.services import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create an account. The email must not be in use yet."""
    return await auth_service.register_user(db, payload)


@router.post("/login", response_model=Token)
async def log_in(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    token = await auth_service.authenticate_user(db, payload)
    return Token(access_token=token)
