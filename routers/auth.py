from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from db import SessionDep
from schemas import AuthResponse, Identity, LoginData, UserCreate, UserRead
from services import auth as auth_service

router = APIRouter(tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Reads the 'Authorization: Bearer <token>' header and returns the
    identity signed into the token.
    Raises MissingToken (401) / InvalidToken (403).
    """
    token = credentials.credentials if credentials else None
    return auth_service.authenticate(token)


IdentityDep = Annotated[Identity, Depends(get_identity)]


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(user_in: UserCreate, session: SessionDep):
    """
    Register a new donor or recipient and return a session token.
    """
    return auth_service.register(session, user_in)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginData, session: SessionDep):
    """
    Log in with email + password.
    """
    return auth_service.login(session, payload)


@router.get("/me", response_model=UserRead)
def read_me(identity: IdentityDep, session: SessionDep):
    """
    Get info about the currently logged-in user.
    """
    return auth_service.current_user(session, identity)
