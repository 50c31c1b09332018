"""
API tests for registration, login, profile and e-mail verification.
"""

from fastapi import status

from conftest import RecordingEmailSender
from app.core.config import settings
from app.core.constants import BuiltinIdentity
from app.models.user import User
from app.services.mailer import get_email_sender

AUTH = "/api/auth"

REGISTRATION = {
    "name": "Carol",
    "email": "carol@example.org",
    "password": "secret123",
    "phone": "555-0101",
    "address": "1 Elm St",
}


def register(client, **overrides):
    return client.post(f"{AUTH}/register", json={**REGISTRATION, **overrides})


def login(client, email, password):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


class TestRegistration:

    def test_register_success(self, client, db_session, email_sender):
        response = register(client)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["name"] == "Carol"
        assert body["email"] == "carol@example.org"
        assert body["role"] == "user"
        assert body["tokenType"] == "bearer"
        assert body["accessToken"].count(".") == 2
        assert "password" not in body

        user = db_session.get(User, body["userId"])
        assert user.is_verified is False
        assert user.hashed_password != "secret123"
        assert email_sender.sent == [("carol@example.org", user.verification_token)]

    def test_email_is_case_insensitive(self, client):
        register(client)
        response = register(client, email="CAROL@example.org")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    def test_builtin_email_is_taken(self, client):
        response = register(client, email=BuiltinIdentity.DEMO_USER_EMAIL)
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_invalid_email(self, client):
        response = register(client, email="not-an-email")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_short_password(self, client):
        assert register(client, password="123").status_code == status.HTTP_400_BAD_REQUEST

    def test_mail_failure_does_not_fail_registration(self, client):
        from main import app

        app.dependency_overrides[get_email_sender] = lambda: RecordingEmailSender(fail=True)
        response = register(client)

        assert response.status_code == status.HTTP_201_CREATED

    def test_returned_id_works_as_credential(self, client):
        user_id = register(client).json()["userId"]

        response = client.get(f"{AUTH}/me", headers={"Authorization": user_id})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == user_id


class TestLogin:

    def test_login_success(self, client):
        register(client)

        response = login(client, "carol@example.org", "secret123")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Login successful"
        me = client.get(f"{AUTH}/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
        assert me.json()["id"] == body["userId"]

    def test_wrong_password(self, client):
        register(client)

        response = login(client, "carol@example.org", "wrong-password")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid credentials"
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"

    def test_unknown_email(self, client):
        assert login(client, "nobody@example.org", "secret123").status_code == status.HTTP_400_BAD_REQUEST

    def test_demo_login(self, client):
        body = login(client, BuiltinIdentity.DEMO_USER_EMAIL, BuiltinIdentity.DEMO_USER_PASSWORD).json()

        assert body["userId"] == BuiltinIdentity.DEMO_USER_ID
        assert body["role"] == "user"
        assert body["name"] == BuiltinIdentity.DEMO_USER_NAME

    def test_admin_login(self, client):
        body = login(client, BuiltinIdentity.ADMIN_USER_EMAIL, BuiltinIdentity.ADMIN_USER_PASSWORD).json()

        assert body["userId"] == BuiltinIdentity.ADMIN_USER_ID
        assert body["role"] == "admin"

        me = client.get(f"{AUTH}/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
        assert me.json()["role"] == "admin"


class TestProfile:

    def test_me(self, client, alice, alice_headers):
        response = client.get(f"{AUTH}/me", headers=alice_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["id"] == alice.id
        assert body["isVerified"] is False
        assert body["profilePictureUrl"] is None
        assert "hashedPassword" not in body
        assert "verificationToken" not in body

    def test_me_requires_authentication(self, client):
        assert client.get(f"{AUTH}/me").status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile(self, client, alice_headers):
        response = client.patch(
            f"{AUTH}/update-profile", json={"bio": "Neighbourhood watch", "phone": "555-0199"}, headers=alice_headers
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["bio"] == "Neighbourhood watch"
        assert body["phone"] == "555-0199"
        assert body["name"] == "Alice"

    def test_update_password(self, client, alice_headers):
        response = client.patch(
            f"{AUTH}/update-password",
            json={"currentPassword": "secret123", "newPassword": "better-secret"},
            headers=alice_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert login(client, "alice@example.org", "better-secret").status_code == status.HTTP_200_OK
        assert login(client, "alice@example.org", "secret123").status_code == status.HTTP_400_BAD_REQUEST

    def test_update_password_wrong_current(self, client, alice_headers):
        response = client.patch(
            f"{AUTH}/update-password",
            json={"currentPassword": "nope", "newPassword": "better-secret"},
            headers=alice_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Current password is incorrect"

    def test_profile_picture(self, client, alice_headers):
        files = {"profilePicture": ("me.png", b"\x89PNG\r\n", "image/png")}

        response = client.patch(f"{AUTH}/update-profile-pic", files=files, headers=alice_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["profilePictureUrl"] == "data:image/png;base64,iVBORw0K"
        me = client.get(f"{AUTH}/me", headers=alice_headers).json()
        assert me["profilePictureUrl"] == "data:image/png;base64,iVBORw0K"

    def test_profile_picture_must_be_image(self, client, alice_headers):
        files = {"profilePicture": ("clip.mp4", b"0000", "video/mp4")}
        response = client.patch(f"{AUTH}/update-profile-pic", files=files, headers=alice_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_profile_picture_size_limit(self, client, alice_headers, monkeypatch):
        monkeypatch.setattr(settings, "MAX_PROFILE_PICTURE_BYTES", 4)
        files = {"profilePicture": ("me.png", b"12345", "image/png")}

        response = client.patch(f"{AUTH}/update-profile-pic", files=files, headers=alice_headers)

        assert response.status_code == 413

    def test_profile_picture_missing_file(self, client, alice_headers):
        response = client.patch(f"{AUTH}/update-profile-pic", headers=alice_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestVerification:

    def test_verify_email(self, client, db_session, email_sender):
        user_id = register(client).json()["userId"]
        _, token = email_sender.sent[0]

        response = client.get(f"{AUTH}/verify/{token}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Email verified successfully"
        db_session.expire_all()
        user = db_session.get(User, user_id)
        assert user.is_verified is True
        assert user.verification_token is None

    def test_token_is_single_use(self, client, email_sender):
        register(client)
        _, token = email_sender.sent[0]
        client.get(f"{AUTH}/verify/{token}")

        assert client.get(f"{AUTH}/verify/{token}").status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_token(self, client):
        assert client.get(f"{AUTH}/verify/bogus").status_code == status.HTTP_404_NOT_FOUND
