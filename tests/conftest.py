# tests/conftest.py
import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# 1) Point settings at an in-memory SQLite and a dummy gateway key before any imports
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["AI_GATEWAY_API_KEY"] = "test-key"
os.environ["LLM_PROVIDER"] = "gateway"
os.environ["FORECAST_BACKEND"] = "llm"
os.environ["SENDGRID_API_KEY"] = ""

from grampredict.main import app
from grampredict.db.session import Base, get_db
from grampredict.core.dependencies import get_current_user
from grampredict.core.policy import AppRole
from grampredict.crud import user as crud_user
from grampredict.crud import district as crud_district
from grampredict.schemas.user import UserCreate
from grampredict.schemas.district import DistrictCreate


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # one shared connection so every session sees the same tables
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def login_as(db):
    """Creates a user with the given role and makes it the current user."""
    def _login(role: AppRole = AppRole.PUBLIC, district_id: str = None):
        username = f"{role.value}_user"
        user = crud_user.get_user_by_username(db, username)
        if user is None:
            user = crud_user.create_user(db, UserCreate(
                username=username,
                email=f"{username}@example.com",
                role=role,
                district_id=district_id,
            ))
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


@pytest.fixture()
def district(db):
    return crud_district.create_district(db, DistrictCreate(
        name="Anantapur",
        state="Andhra Pradesh",
        blocks=["Kadiri", "Dharmavaram", "Penukonda"],
    ))
