import asyncio

import pytest
from fastapi import HTTPException

from eventflow.auth import get_token_claims, load_active_user, verify_firebase_token
from eventflow.errors import AccountNotActive
from eventflow.main import app
from eventflow.models import User


def register(client, token_claims, uid, email, name="New Person", role="client"):
    token_claims(uid, email)
    return client.post("/auth/register", json={"name": name, "role": role})


class TestRegistration:
    def test_client_is_active_immediately(self, client, token_claims, db):
        response = register(client, token_claims, "uid-1", "client@example.com", role="client")

        assert response.status_code == 201
        assert response.json()["status"] == "active"
        assert load_active_user(db, "uid-1").email == "client@example.com"

    def test_vendor_waits_for_approval(self, client, token_claims, db):
        response = register(client, token_claims, "uid-2", "vendor@example.com", role="vendor")

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        with pytest.raises(AccountNotActive) as exc_info:
            load_active_user(db, "uid-2")
        assert exc_info.value.status_code == 403
        assert "approval" in exc_info.value.detail

    def test_admin_role_cannot_be_chosen(self, client, token_claims, db):
        response = register(client, token_claims, "uid-3", "sneaky@example.com", role="admin")

        assert response.status_code == 422
        assert db.query(User).count() == 0

    def test_duplicate_profile(self, client, token_claims):
        register(client, token_claims, "uid-4", "twice@example.com")
        assert register(client, token_claims, "uid-4", "twice@example.com").status_code == 409

    def test_token_without_email(self, client):
        app.dependency_overrides[get_token_claims] = lambda: {"uid": "uid-5"}
        response = client.post("/auth/register", json={"name": "No Mail", "role": "client"})

        assert response.status_code == 400

    def test_blank_name(self, client, token_claims):
        assert register(client, token_claims, "uid-6", "blank@example.com", name="   ").status_code == 422

    def test_unknown_identity_has_no_profile(self, db):
        with pytest.raises(HTTPException) as exc_info:
            load_active_user(db, "nobody")
        assert exc_info.value.status_code == 403


class TestAdministration:
    def test_admin_approves_vendor(self, client, login, admin, make_user, db):
        vendor = make_user("vendor", status="pending")
        login(admin)

        response = client.patch(f"/users/{vendor.id}/status", json={"status": "active"})

        assert response.status_code == 200
        assert load_active_user(db, vendor.firebase_uid).id == vendor.id

    def test_disabled_user_is_refused(self, client, login, admin, make_user, db):
        customer = make_user("client")
        login(admin)
        client.patch(f"/users/{customer.id}/status", json={"status": "disabled"})

        with pytest.raises(AccountNotActive):
            load_active_user(db, customer.firebase_uid)

    def test_change_role(self, client, login, admin, make_user):
        customer = make_user("client")
        login(admin)

        response = client.patch(f"/users/{customer.id}/role", json={"role": "vendor"})

        assert response.json()["role"] == "vendor"

    def test_list_and_search(self, client, login, admin, make_user):
        make_user("vendor", name="Venue Co")
        make_user("client", name="Grace Hopper")
        login(admin)

        vendors = client.get("/users/vendors").json()
        found = client.get("/users", params={"search": "grace"}).json()

        assert [v["name"] for v in vendors] == ["Venue Co"]
        assert [u["name"] for u in found] == ["Grace Hopper"]

    def test_user_management_is_admin_only(self, client, login, make_user):
        login(make_user("client"))
        assert client.get("/users").status_code == 403

    def test_me(self, client, login, make_user):
        customer = login(make_user("client", name="Grace Hopper"))

        body = client.get("/auth/me").json()

        assert body["id"] == customer.id
        assert body["name"] == "Grace Hopper"


class TestTokenVerification:
    @pytest.mark.parametrize("token", ["not-a-jwt", "a.b", "x.y.z"])
    def test_malformed_tokens_are_rejected(self, token):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(verify_firebase_token(token))
        assert exc_info.value.status_code == 401
