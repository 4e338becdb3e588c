import logging
import os
import secrets
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidToken,
    MissingToken,
    UserNotFound,
)
from models import User
from schemas import AuthResponse, Identity, LoginData, UserCreate, UserRead

logger = logging.getLogger(__name__)

SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)
TOKEN_MAX_AGE_SECONDS = 60 * 60 * 24

serializer = URLSafeTimedSerializer(SECRET_KEY, salt="session")


pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_session_token(user: User) -> str:
    """
    Store userId + email in the signed token.
    Example data:
        {"userId": 3, "email": "ana@example.com"}
    """
    return serializer.dumps({"userId": user.id, "email": user.email})


def verify_session_token(
    token: str, max_age_seconds: int = TOKEN_MAX_AGE_SECONDS
) -> Identity:
    """
    Returns the Identity stored in the token.
    Raises InvalidToken if the signature is bad or the token expired.
    """
    try:
        data = serializer.loads(token, max_age=max_age_seconds)
    except SignatureExpired:
        raise InvalidToken("Token expired")
    except BadSignature:
        raise InvalidToken()

    try:
        return Identity.model_validate(data)
    except ValueError:
        raise InvalidToken()


def authenticate(token: Optional[str]) -> Identity:
    if not token:
        raise MissingToken()
    return verify_session_token(token)


def _auth_response(user: User, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=create_session_token(user),
        user=UserRead.model_validate(user),
    )


def register(session: Session, user_in: UserCreate) -> AuthResponse:
    """Create a user with a hashed password and sign them in."""
    existing = session.exec(select(User).where(User.email == user_in.email)).first()
    if existing:
        raise DuplicateEmail()

    user = User(
        name=user_in.name,
        email=user_in.email,
        password_hash=hash_password(user_in.password),
        phone=user_in.phone,
        address=user_in.address,
        role=user_in.role,
    )

    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # lost a race against another registration for the same email
        session.rollback()
        raise DuplicateEmail()
    session.refresh(user)

    logger.info("Registered %s user %s", user.role.value, user.id)
    return _auth_response(user, "User registered successfully")


def login(session: Session, payload: LoginData) -> AuthResponse:
    """
    Unknown email and wrong password fail the same way so callers
    cannot tell which one it was.
    """
    user = session.exec(select(User).where(User.email == payload.email)).first()

    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    return _auth_response(user, "Login successful")


def current_user(session: Session, identity: Identity) -> User:
    user = session.get(User, identity.user_id)
    if user is None:
        raise UserNotFound()
    return user
