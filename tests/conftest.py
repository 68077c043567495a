from __future__ import annotations

import os

# Settings are read at import time, so point them at throwaway targets first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import database
from app.database import Base
from app.main import app
from app.security.tokens import TokenService
from app.users import crud as user_crud
from app.users.auth import get_token_service

START_TIME = 1_700_000_000


class FakeClock:
    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture()
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    TestingSessionLocal = sessionmaker(bind=connection, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture()
def committed_session():
    # Own engine and no outer transaction, so a rollback only undoes the
    # work in flight and earlier commits stay visible
    own_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=own_engine)
    session: Session = sessionmaker(bind=own_engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=own_engine)
        own_engine.dispose()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def token_service(clock):
    return TokenService(secret_key="test-secret-key", clock=clock)


@pytest.fixture()
def client(db_session, token_service):
    def override_get_db():
        yield db_session

    app.dependency_overrides[database.get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def alice(db_session):
    return user_crud.register(db_session, "alice", "pw1")


@pytest.fixture()
def bob(db_session):
    return user_crud.register(db_session, "bob", "pw2")


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def signup(client: TestClient, username: str, password: str) -> str:
    response = client.post("/users/signup", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["access_token"]
