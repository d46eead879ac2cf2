import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from main import app
from core.config import get_settings
from dependencies import get_session, create_access_token
from auth.security import get_password_hash
from models import User, Post, Comment


@pytest.fixture(scope="session")
def settings():
    return get_settings()


@pytest.fixture
def test_db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db_session(test_db_engine):
    with Session(test_db_engine) as session:
        yield session


@pytest.fixture
def client(db_session):
    def get_session_override():
        return db_session

    app.dependency_overrides[get_session] = get_session_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(username="alice", first_name="Alice", last_name="Liddell", password="testpass123"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            first_name=first_name,
            last_name=last_name,
            password=get_password_hash(password),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_post(db_session):
    def _make_post(user, **fields):
        values = {
            "title": "Board games night",
            "body": "Bring a game",
            "location": "Deerfield Hall",
            "capacity": 40,
        }
        values.update(fields)
        post = Post(user_id=user.id, **values)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post
    return _make_post


@pytest.fixture
def make_comment(db_session):
    def _make_comment(post, user, body="Count me in", **fields):
        comment = Comment(post_id=post.id, user_id=user.id, body=body, **fields)
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment
    return _make_comment


@pytest.fixture
def login(client):
    """Put an access token cookie for ``user`` on the test client"""
    def _login(user):
        token = create_access_token(data={"sub": user.username})
        client.cookies.set("access_token", f"Bearer {token}")
        return client
    return _login
