# foodconnect/routers/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from foodconnect.core import locales
from foodconnect.core.limiter import limiter
from foodconnect.dependencies import get_current_user, get_db
from foodconnect.models.user import User
from foodconnect.schemas.common import StatusMessage
from foodconnect.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserOut,
)
from foodconnect.services import auth as auth_service

router = APIRouter()


@router.post("/auth/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Registers a restaurant or an influencer together with its profile.
    The account stays pending until an admin approves it.
    """
    user = auth_service.register(db, data)
    return RegisterResponse(message=locales.SUCCESS_REGISTERED, user=UserOut.model_validate(user))


@router.post("/auth/login", response_model=LoginResponse)
@limiter.limit("5/minute")
def login(request: Request, data: LoginRequest, db: Session = Depends(get_db)):
    """Limited to 5 attempts per minute per client."""
    return auth_service.login(db, data)


@router.get("/auth/verify-email/{token}", response_model=StatusMessage)
def verify_email(token: str, db: Session = Depends(get_db)):
    auth_service.verify_email(db, token)
    return StatusMessage(message=locales.SUCCESS_EMAIL_VERIFIED)


@router.post("/auth/forgot-password", response_model=StatusMessage)
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    auth_service.forgot_password(db, data.email)
    return StatusMessage(message=locales.SUCCESS_RESET_SENT)


@router.post("/auth/reset-password/{token}", response_model=StatusMessage)
def reset_password(token: str, data: ResetPasswordRequest, db: Session = Depends(get_db)):
    auth_service.reset_password(db, token, data.password)
    return StatusMessage(message=locales.SUCCESS_PASSWORD_RESET)


@router.post("/auth/logout", response_model=StatusMessage)
def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client just drops its copy."""
    return StatusMessage(message=locales.SUCCESS_LOGGED_OUT)
