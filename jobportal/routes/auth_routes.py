# jobportal/routes/auth_routes.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from jobportal.crud import user_crud
from jobportal.database import get_db
from jobportal.schema.auth_schema import LoginResponse
from jobportal.schema.common_schema import Envelope, envelope
from jobportal.schema.user_schema import LoginRequest, MeResponse, SignupRequest, UserResponse
from jobportal.utils.security import (
    Actor,
    EmployerActor,
    clear_auth_cookie,
    create_access_token,
    get_current_actor,
    set_auth_cookie,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=Envelope[UserResponse], status_code=201)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Register a job seeker or employer account"""
    user = user_crud.create_user(db, data.name, data.email, data.password, data.role)
    return envelope(user, "User registered successfully")


@router.post("/login", response_model=Envelope[LoginResponse])
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Issue a 7-day token as bearer and httpOnly cookie"""
    user = user_crud.authenticate_user(db, data.email, data.password)
    token = create_access_token(user)
    set_auth_cookie(response, token)
    return envelope(
        {"access_token": token, "token_type": "bearer", "user": user},
        "Login successful"
    )


@router.post("/logout", response_model=Envelope[dict])
def logout(response: Response):
    clear_auth_cookie(response)
    return envelope(message="Logged out successfully")


@router.get("/me", response_model=Envelope[MeResponse])
def me(actor: Actor = Depends(get_current_actor)):
    data = MeResponse.model_validate(actor.user)
    if isinstance(actor, EmployerActor):
        data.employer_id = actor.employer_id
        data.company_id = actor.company_id
    else:
        data.job_seeker_id = actor.job_seeker_id
    return envelope(data, "User fetched successfully")
