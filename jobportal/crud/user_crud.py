# jobportal/crud/user_crud.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.exceptions import Conflict, NotFound, Unauthorized
from jobportal.models.user import User, UserRole
from jobportal.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, name: str, email: str, password: str, role: UserRole) -> User:
    """Sign up a new user; email is unique"""
    email = email.strip().lower()
    if get_user_by_email(db, email):
        raise Conflict("User with this email already exists")

    user = User(name=name, email=email, role=role, hashed_password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User with this email already exists")
    db.refresh(user)

    logger.info("User signed up: %s (%s)", user.id, role.value)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    if not verify_password(password, user.hashed_password):
        raise Unauthorized("Invalid credentials")
    return user


def update_basic_details(db: Session, user: User, name: str, phone: str, location: str,
                         profile_picture: str = None) -> User:
    user.name = name
    user.phone = phone
    user.location = location
    if profile_picture is not None:
        user.profile_picture = profile_picture
    db.commit()
    db.refresh(user)
    return user
