from fastapi import status
from models import User
from auth.security import get_password_hash


def test_register_user(client, db_session):
    response = client.post("/auth/register", json={
        "username": "testuser",
        "email": "test@example.com",
        "first_name": "Test",
        "last_name": "User",
        "password": "testpass123"
    })
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["username"] == "testuser"
    assert "password" not in response.json()


def test_register_duplicate_user(client, make_user):
    make_user("testuser")
    response = client.post("/auth/register", json={
        "username": "testuser",
        "email": "other@example.com",
        "password": "testpass123"
    })
    assert response.status_code == status.HTTP_409_CONFLICT


def test_register_invalid_email(client):
    response = client.post("/auth/register", json={
        "username": "testuser",
        "email": "not-an-email",
        "password": "testpass123"
    })
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_login_user(client, db_session):
    user = User(
        username="testuser",
        email="test@example.com",
        password=get_password_hash("testpass123")
    )
    db_session.add(user)
    db_session.commit()

    response = client.post("/auth/token", data={
        "username": "testuser",
        "password": "testpass123"
    })
    assert response.status_code == status.HTTP_200_OK
    assert "access_token" in response.cookies


def test_login_wrong_password(client, make_user):
    make_user("testuser")
    response = client.post("/auth/token", data={
        "username": "testuser",
        "password": "wrong"
    })
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout(client):
    response = client.post("/auth/logout")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Logged out"
