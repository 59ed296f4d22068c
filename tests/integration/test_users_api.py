"""Integration tests for registration, account management and login"""

import uuid
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient


def test_register_user(client: TestClient, user_payload):
    response = client.post("/register", json=user_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User Successfully Registered"
    assert uuid.UUID(data["id"])


@pytest.mark.parametrize("field", ["email", "aadhar_num", "mobile_num", "pan_num"])
def test_register_duplicate_identity_field(client: TestClient, user_payload, field: str):
    """Sharing any one unique field yields one success and one conflict"""
    first = user_payload()
    second = user_payload(
        email="someone.else@example.com",
        aadhar_num=111122223333,
        mobile_num=9000000001,
        pan_num="ZZZZZ9999Z",
    )
    second[field] = first[field]

    assert client.post("/register", json=first).status_code == 201

    response = client.post("/register", json=second)
    assert response.status_code == 406
    assert response.json()["detail"] == "User already exists"

    assert len(client.get("/register/users").json()) == 1


def test_register_duplicate_in_reverse_order(client: TestClient, user_payload):
    first = user_payload(email="first@example.com", aadhar_num=111122223333, mobile_num=9000000001, pan_num="AAAAA1111A")
    second = user_payload(email="first@example.com")

    assert client.post("/register", json=second).status_code == 201
    assert client.post("/register", json=first).status_code == 406


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "R"},
        {"email": "not-an-email"},
        {"mobile_num": 912345678},
        {"mobile_num": 91234567801},
        {"aadhar_num": 1234567890123},
        {"salary": "lots"},
    ],
)
def test_register_validation_error(client: TestClient, user_payload, overrides):
    response = client.post("/register", json=user_payload(**overrides))

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_register_password_over_bcrypt_limit(client: TestClient, user_payload):
    """40 characters but 80 UTF-8 bytes"""
    response = client.post("/register", json=user_payload(password="é" * 40))

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"
    assert client.get("/register/users").json() == []


def test_register_password_at_bcrypt_limit(client: TestClient, user_payload):
    payload = user_payload(password="é" * 36)

    assert client.post("/register", json=payload).status_code == 201
    response = client.post("/login", json={"aadhar_num": payload["aadhar_num"], "password": payload["password"]})
    assert response.status_code == 200


def test_register_missing_field(client: TestClient, user_payload):
    payload = user_payload()
    del payload["pan_num"]

    response = client.post("/register", json=payload)
    assert response.status_code == 400


def test_list_users_hides_password(client: TestClient, registered_user):
    response = client.get("/register/users")

    assert response.status_code == 200
    users = response.json()
    assert len(users) == 1
    assert users[0]["id"] == registered_user["id"]
    assert users[0]["is_kyc"] is False
    assert "password" not in users[0]


def test_get_user(client: TestClient, registered_user):
    response = client.get(f"/register/user/{registered_user['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == registered_user["email"]
    assert data["aadhar_num"] == registered_user["aadhar_num"]


@pytest.mark.parametrize("user_id", [str(uuid.uuid4()), "not-a-valid-id"])
def test_get_user_not_found(client: TestClient, user_id: str):
    response = client.get(f"/register/user/{user_id}")

    assert response.status_code == 400
    assert response.json()["detail"] == "User not found"


def test_get_user_storage_error(client: TestClient, registered_user):
    with patch(
        "loan_origination.infrastructure.database.repositories.UserRepository.get_user_by_id",
        side_effect=RuntimeError("connection reset"),
    ):
        response = client.get(f"/register/user/{registered_user['id']}")

    assert response.status_code == 400
    assert response.json()["detail"] == "Error fetching user"


def test_update_user(client: TestClient, registered_user):
    response = client.patch(
        f"/register/user/{registered_user['id']}",
        json={"salary": 800000, "is_kyc": True, "address": "7 Park Street, Kolkata"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Account got updated"

    data = client.get(f"/register/user/{registered_user['id']}").json()
    assert data["salary"] == 800000
    assert data["is_kyc"] is True
    assert data["address"] == "7 Park Street, Kolkata"
    assert data["name"] == registered_user["name"]


def test_update_user_password_is_rehashed(client: TestClient, registered_user):
    response = client.patch(
        f"/register/user/{registered_user['id']}",
        json={"password": "N3wSecret!"},
    )
    assert response.status_code == 200

    old_login = client.post(
        "/login",
        json={"aadhar_num": registered_user["aadhar_num"], "password": registered_user["password"]},
    )
    new_login = client.post(
        "/login",
        json={"aadhar_num": registered_user["aadhar_num"], "password": "N3wSecret!"},
    )
    assert old_login.status_code == 401
    assert new_login.status_code == 200


@pytest.mark.parametrize("field,value", [("aadhar_num", 111122223333), ("pan_num", "ZZZZZ9999Z"), ("role", "admin")])
def test_update_user_rejects_fields_outside_patch(client: TestClient, registered_user, field: str, value):
    """Identity numbers are immutable and unknown fields are refused"""
    response = client.patch(f"/register/user/{registered_user['id']}", json={field: value})

    assert response.status_code == 400

    data = client.get(f"/register/user/{registered_user['id']}").json()
    assert data.get(field) != value


def test_update_user_email_conflict(client: TestClient, registered_user, user_payload):
    other = user_payload(
        email="other@example.com",
        aadhar_num=111122223333,
        mobile_num=9000000001,
        pan_num="ZZZZZ9999Z",
    )
    other_id = client.post("/register", json=other).json()["id"]

    response = client.patch(f"/register/user/{other_id}", json={"email": registered_user["email"]})

    assert response.status_code == 406


def test_update_unknown_user(client: TestClient):
    response = client.patch(f"/register/user/{uuid.uuid4()}", json={"salary": 1})
    assert response.status_code == 400


def test_delete_user(client: TestClient, registered_user):
    first = client.delete(f"/register/user/{registered_user['id']}")
    second = client.delete(f"/register/user/{registered_user['id']}")

    assert first.status_code == 200
    assert first.json() == {"success": True, "message": "Account deleted"}
    assert second.status_code == 400
    assert second.json()["detail"] == "This user id doesn't exist"


def test_delete_user_with_loan_bookings_refused(client: TestClient, registered_user, loan_payload):
    assert client.post("/loans/create", json=loan_payload()).status_code == 201

    response = client.delete(f"/register/user/{registered_user['id']}")

    assert response.status_code == 409
    assert client.get(f"/register/user/{registered_user['id']}").status_code == 200


def test_login_success(client: TestClient, registered_user):
    response = client.post(
        "/login",
        json={"aadhar_num": registered_user["aadhar_num"], "password": registered_user["password"]},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "User logged in successfully"
    assert "set-cookie" not in response.headers


def test_login_wrong_password(client: TestClient, registered_user):
    response = client.post(
        "/login",
        json={"aadhar_num": registered_user["aadhar_num"], "password": "wrong-password"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Wrong Password"


def test_login_unknown_user(client: TestClient):
    response = client.post("/login", json={"aadhar_num": 999999999999, "password": "whatever"})

    assert response.status_code == 401
    assert response.json()["detail"] == "User not registered"


def test_login_validation_error(client: TestClient):
    response = client.post("/login", json={"aadhar_num": 999999999999})
    assert response.status_code == 400


def test_login_password_over_bcrypt_limit(client: TestClient, registered_user):
    response = client.post("/login", json={"aadhar_num": registered_user["aadhar_num"], "password": "é" * 40})

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_update_user_password_over_bcrypt_limit(client: TestClient, registered_user):
    response = client.patch(f"/register/user/{registered_user['id']}", json={"password": "é" * 40})

    assert response.status_code == 400
    response = client.post(
        "/login",
        json={"aadhar_num": registered_user["aadhar_num"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
