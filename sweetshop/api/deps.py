from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sweetshop.core.database import get_db
from sweetshop.core.errors import AuthenticationError, PermissionDeniedError
from sweetshop.models.user import User
from sweetshop.services import auth as auth_service

# auto_error is off so that a missing header goes through our own 401
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("No token provided, authorization denied")
    return auth_service.resolve_token(db, credentials.credentials)

def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return current_user
