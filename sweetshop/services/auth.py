import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sweetshop.core import security
from sweetshop.core.config import settings
from sweetshop.core.errors import AuthenticationError, ConflictError, PermissionDeniedError
from sweetshop.models.user import User, UserRole
from sweetshop.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()

def register_user(db: Session, user_in: RegisterRequest) -> Tuple[User, str]:
    """
    Create a user account and issue its first access token.
    """
    if user_in.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_REGISTRATION:
        raise PermissionDeniedError("Admin registration is disabled")

    email = user_in.email.lower()
    if get_user_by_email(db, email):
        raise ConflictError("User already exists with this email")

    user = User(
        name=user_in.name,
        email=email,
        hashed_password=security.get_password_hash(user_in.password),
        role=user_in.role.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists with this email")
    db.refresh(user)

    logger.info(f"Registered user {user.id} with role {user.role}")
    return user, security.create_access_token(user.id)

def authenticate(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = get_user_by_email(db, email)
    if not user or not security.verify_password(password, user.hashed_password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationError("Invalid credentials")
    return user, security.create_access_token(user.id)

def resolve_token(db: Session, token: str) -> User:
    """
    Map a bearer token to its user. Tokens are stateless: only the
    signature, the expiry and the existence of the user are checked.
    """
    subject = security.decode_access_token(token)
    if subject is None or not subject.isdigit():
        raise AuthenticationError("Token is not valid")
    user = db.get(User, int(subject))
    if not user:
        raise AuthenticationError("Token is not valid")
    return user

def ensure_admin(db: Session, email: str, password: str, name: str) -> User:
    """Create the bootstrap admin, or promote the account already using its email."""
    user = get_user_by_email(db, email)
    if user:
        if not user.is_admin:
            logger.warning(f"Promoting existing user {user.email} to bootstrap admin")
            user.role = UserRole.ADMIN.value
            db.commit()
            db.refresh(user)
        return user
    user = User(
        name=name,
        email=email.lower(),
        hashed_password=security.get_password_hash(password),
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created bootstrap admin {user.email}")
    return user
