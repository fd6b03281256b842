"""User profile API tests: profile read/update, password change, profile image."""

from __future__ import annotations

import io

import pytest

pytestmark = pytest.mark.integration

from ventdiary.core.auth.token_repository import RefreshTokenRepository
from ventdiary.core.users.services import create_user
from ventdiary.extensions import db
from ventdiary.tests.conftest import API, PASSWORD


# ==================== Profile ====================


def test_get_profile(client, user, headers):
    resp = client.get(f"{API}/users/profile", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]["user"]
    assert data["name"] == "Test User"
    assert data["profileImageUrl"] is None


def test_update_profile_name_and_email(client, user, headers):
    resp = client.patch(
        f"{API}/users/profile",
        json={"name": "  New Name ", "email": "NEW@example.com"},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.get_json()["data"]["user"]
    assert data["name"] == "New Name"
    assert data["email"] == "new@example.com"


def test_update_profile_rejects_password_fields(client, user, headers):
    resp = client.patch(f"{API}/users/profile", json={"password": "Sneaky123!"}, headers=headers)
    assert resp.status_code == 400
    assert "/change-password" in resp.get_json()["message"]


def test_update_profile_email_taken(client, user, headers):
    create_user(name="Taken", email="taken@example.com", password=PASSWORD)
    resp = client.patch(f"{API}/users/profile", json={"email": "taken@example.com"}, headers=headers)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "email_already_exists"
    db.session.refresh(user)
    assert user.email == "test@example.com"


# ==================== Change password ====================


def test_change_password_success_revokes_sessions(client, user, tokens, headers):
    resp = client.patch(
        f"{API}/users/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "Changed123!", "confirmPassword": "Changed123!"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Password changed successfully."
    assert RefreshTokenRepository().count_for_user(user.id) == 0

    stale = client.post(f"{API}/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert stale.status_code == 401

    login = client.post(f"{API}/auth/login", json={"email": "test@example.com", "password": "Changed123!"})
    assert login.status_code == 200


def test_change_password_wrong_current(client, user, headers):
    resp = client.patch(
        f"{API}/users/change-password",
        json={"currentPassword": "wrong-one", "newPassword": "Changed123!", "confirmPassword": "Changed123!"},
        headers=headers,
    )
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "incorrect_password"


@pytest.mark.parametrize(
    ("new", "confirm", "code"),
    [
        ("Changed123!", "Different123!", "passwords_do_not_match"),
        ("short", "short", "password_too_short"),
    ],
)
def test_change_password_validation(client, user, headers, new, confirm, code):
    resp = client.patch(
        f"{API}/users/change-password",
        json={"currentPassword": PASSWORD, "newPassword": new, "confirmPassword": confirm},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == code
    assert user.check_password(PASSWORD)


# ==================== Profile image ====================


def test_upload_profile_image(client, user, headers, storage):
    resp = client.post(
        f"{API}/users/profile-image",
        data={"profileImage": (io.BytesIO(b"\x89PNG fake"), "me.png", "image/png")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    url = resp.get_json()["data"]["user"]["profileImageUrl"]
    assert url == f"https://cdn.example.com/profile-images/user-{user.id}"
    assert storage.objects[f"profile-images/user-{user.id}"] == (b"\x89PNG fake", "image/png")


def test_upload_profile_image_rejects_non_image(client, user, headers, storage):
    resp = client.post(
        f"{API}/users/profile-image",
        data={"profileImage": (io.BytesIO(b"hello"), "notes.txt", "text/plain")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Not an image! Please upload only images."
    assert storage.objects == {}


def test_upload_profile_image_requires_file(client, user, headers):
    resp = client.post(f"{API}/users/profile-image", data={}, headers=headers, content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "missing_file"


def test_upload_profile_image_storage_failure_leaves_user_unchanged(client, user, headers, storage):
    storage.fail = True
    resp = client.post(
        f"{API}/users/profile-image",
        data={"profileImage": (io.BytesIO(b"\x89PNG"), "me.png", "image/png")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "upload_failed"
    db.session.refresh(user)
    assert user.profile_image_url is None


def test_upload_profile_image_too_large(app, client, user, headers, storage):
    app.config["PROFILE_IMAGE_MAX_BYTES"] = 4
    resp = client.post(
        f"{API}/users/profile-image",
        data={"profileImage": (io.BytesIO(b"12345"), "me.png", "image/png")},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "file_too_large"
