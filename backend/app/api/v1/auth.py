"""
Authentication API endpoints.

Handles login with JWT token generation and the current user's profile.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import ServiceError
from app.core.responses import envelope_response
from app.core.security import create_access_token
from app.db.session import get_db
from app.models import User
from app.schemas.auth import LoginRequest, Token
from app.services.auth import AuthService, token_claims

router = APIRouter()


# ============== API Endpoints ==============


@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password.

    Returns the access token, its type and the user (without password).
    Unknown emails and wrong passwords both return 401 "Invalid credentials";
    deactivated accounts return 403.
    """
    return envelope_response(AuthService(db).login(credentials.email, credentials.password))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    OAuth2 password flow login, used by the interactive docs.

    Send username (email) and password as form data.
    """
    try:
        user = AuthService(db).authenticate(form_data.username, form_data.password)
    except ServiceError as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_access_token(token_claims(user)))


@router.get("/profile")
def get_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get current authenticated user profile.

    Requires valid JWT token in Authorization header. Includes the worker or
    recruiter profile when one exists.
    """
    return envelope_response(AuthService(db).profile(current_user))
