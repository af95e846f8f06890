# jobportal/utils/security.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from fastapi import Depends, Request, Response
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from jobportal.config import (
    ACCESS_TOKEN_EXPIRE_DAYS,
    ALGORITHM,
    AUTH_COOKIE_NAME,
    BCRYPT_ROUNDS,
    IS_PRODUCTION,
    SECRET_KEY,
)
from jobportal.database import get_db
from jobportal.exceptions import Forbidden, PreconditionFailed, Unauthorized
from jobportal.models.company import Company
from jobportal.models.user import User, UserRole

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# Swagger's Authorize button posts here; the cookie is the browser fallback
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/auth/login",
    auto_error=False
)


def hash_password(password: str) -> str:
    """Hash a plain password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against hashed password"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT carrying the user's id, email and role"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT; any failure is Unauthorized"""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    if not payload.get("sub") or not payload.get("role"):
        raise Unauthorized("Invalid authentication credentials")
    return payload


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="strict",
        max_age=ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="strict",
    )


# ===== ACTORS =====

@dataclass
class JobSeekerActor:
    user: User
    job_seeker_id: Optional[uuid.UUID]

    role = UserRole.JOB_SEEKER


@dataclass
class EmployerActor:
    user: User
    employer_id: Optional[uuid.UUID]
    company_id: Optional[uuid.UUID]

    role = UserRole.EMPLOYER


Actor = Union[JobSeekerActor, EmployerActor]


def resolve_actor(db: Session, token: Optional[str]) -> Actor:
    """Verify the token, reload the user and attach the role profile ids"""
    if not token:
        raise Unauthorized("Not authenticated")

    payload = decode_access_token(token)
    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise Unauthorized("Invalid user ID format")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise Unauthorized("User not found")

    if user.role.value != payload["role"]:
        raise Unauthorized("Token role does not match user")

    if user.role == UserRole.EMPLOYER:
        employer = user.employer
        return EmployerActor(
            user=user,
            employer_id=employer.id if employer else None,
            company_id=employer.company_id if employer else None,
        )

    seeker = user.job_seeker
    return JobSeekerActor(user=user, job_seeker_id=seeker.id if seeker else None)


def _request_token(request: Request, bearer: Optional[str]) -> Optional[str]:
    return bearer or request.cookies.get(AUTH_COOKIE_NAME)


def authenticate(required_role: Optional[UserRole] = None):
    """Dependency factory resolving the caller, optionally restricted to one role"""

    def dependency(
        request: Request,
        token: Optional[str] = Depends(oauth2_scheme),
        db: Session = Depends(get_db)
    ) -> Actor:
        actor = resolve_actor(db, _request_token(request, token))
        if required_role is not None and actor.role != required_role:
            raise Forbidden(f"Access restricted to {required_role.value.lower().replace('_', ' ')}s")
        return actor

    return dependency


def optional_actor(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Optional[Actor]:
    """Attach the caller when a valid token is present, otherwise continue anonymously"""
    try:
        return resolve_actor(db, _request_token(request, token))
    except Unauthorized:
        return None


get_current_actor = authenticate()
get_current_employer = authenticate(UserRole.EMPLOYER)
get_current_job_seeker = authenticate(UserRole.JOB_SEEKER)


# ===== GUARDS =====

def require_complete_profile(role: UserRole):
    """The role profile row must exist before dependent endpoints are usable"""
    get_actor = authenticate(role)

    def dependency(actor: Actor = Depends(get_actor)) -> Actor:
        if isinstance(actor, JobSeekerActor) and actor.job_seeker_id is None:
            raise PreconditionFailed(
                "Please complete your job seeker profile first",
                step="job_seeker_profile",
            )
        if isinstance(actor, EmployerActor) and actor.employer_id is None:
            raise PreconditionFailed(
                "Please complete your employer profile first",
                step="employer_profile",
            )
        return actor

    return dependency


require_job_seeker_profile = require_complete_profile(UserRole.JOB_SEEKER)
require_employer_profile = require_complete_profile(UserRole.EMPLOYER)


def require_company(
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
) -> EmployerActor:
    """Employer must belong to an active company"""
    if actor.company_id is None:
        raise PreconditionFailed(
            "Please select or create a company first",
            action="company_required",
            step="company_selection",
        )

    company = db.get(Company, actor.company_id)
    if not company or not company.is_active:
        raise Forbidden("Your company profile is inactive")

    return actor
