from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sweetshop.api import deps
from sweetshop.core.database import get_db
from sweetshop.models.user import User
from sweetshop.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from sweetshop.services import auth as auth_service

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    *,
    db: Session = Depends(get_db),
    user_in: RegisterRequest,
) -> Any:
    """
    Register a new account and return its access token.
    """
    user, token = auth_service.register_user(db, user_in)
    return {
        "success": True,
        "message": "User registered successfully",
        "data": {"token": token, "user": user},
    }

@router.post("/login", response_model=AuthResponse)
def login(
    *,
    db: Session = Depends(get_db),
    credentials: LoginRequest,
) -> Any:
    user, token = auth_service.authenticate(db, credentials.email, credentials.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": {"token": token, "user": user},
    }

@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> Any:
    return {"success": True, "data": {"user": current_user}}
