from tests.fakes import bearer


def test_get_session_returns_customer(client, signed_in_token, existing_customer):
    r = client.get("/v1/session", headers=bearer(signed_in_token))
    assert r.status_code == 200, r.text
    assert r.json() == {
        "customerId": existing_customer.id,
        "email": existing_customer.email,
        "firstName": existing_customer.first_name,
        "lastName": existing_customer.last_name,
    }


def test_get_session_unknown_token(client):
    r = client.get("/v1/session", headers=bearer("nope"))
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid or expired token"


def test_get_session_without_header(client):
    r = client.get("/v1/session")
    # HTTPBearer rejects a missing header before our code runs
    assert r.status_code in (401, 403)


def test_logout_revokes_session(client, signed_in_token):
    r = client.delete("/v1/session", headers=bearer(signed_in_token))
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r2 = client.get("/v1/session", headers=bearer(signed_in_token))
    assert r2.status_code == 401


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
