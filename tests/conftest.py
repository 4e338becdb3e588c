import os

# keep the app's own engine off Postgres while tests import it
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401  registers the tables
from db import get_session
from main import app
from schemas import DonationCreate, Identity, UserCreate
from services import auth as auth_service


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def donation_payload(**overrides):
    payload = {
        "title": "Bread",
        "description": "Fresh sourdough from this morning",
        "foodType": "bakery",
        "quantity": "5 loaves",
        "expiryDate": (date.today() + timedelta(days=2)).isoformat(),
        "location": "Main St Community Hall",
        "contactInfo": "555-0100",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def signup(client):
    """Register through the API and return (auth headers, user json)."""

    def _signup(role, email=None, name=None, password="secret123"):
        email = email or f"{role}-{os.urandom(4).hex()}@example.com"
        response = client.post(
            "/api/register",
            json={
                "name": name or role.title(),
                "email": email,
                "password": password,
                "phone": "555-0199",
                "address": "1 Elm St",
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _signup


@pytest.fixture
def make_identity(session):
    """Register through the service layer and return the caller's Identity."""

    def _make_identity(role, email=None, name=None):
        email = email or f"{role}-{os.urandom(4).hex()}@example.com"
        response = auth_service.register(
            session,
            UserCreate(
                name=name or role.title(),
                email=email,
                password="secret123",
                phone="555-0199",
                address="1 Elm St",
                role=role,
            ),
        )
        return Identity(user_id=response.user.id, email=response.user.email)

    return _make_identity


@pytest.fixture
def donation_in():
    return DonationCreate.model_validate(donation_payload())


@pytest.fixture
def donation_json():
    return donation_payload
