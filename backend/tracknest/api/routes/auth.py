"""
Authentication routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tracknest.db.session import get_db
from tracknest.schemas.auth import LoginRequest, LoginResponse
from tracknest.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login and get a bearer token."""
    access_token = auth_service.login(db, credentials.username, credentials.password)
    return LoginResponse(access_token=access_token)
