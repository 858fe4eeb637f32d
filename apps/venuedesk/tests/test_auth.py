def _register(client, **overrides):
    payload = {
        "name": "Robin",
        "email": "robin@example.com",
        "phone": "+49 30 1234567",
        "role": "Booker",
        "password": "abcdef",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_registration_rules(client):
    short = _register(client, password="abcd")
    assert short.status_code == 400
    assert short.json()["error"] == "Password must be at least 6 characters"

    bad_role = _register(client, role="Superuser")
    assert bad_role.status_code == 400
    assert bad_role.json()["error"] == "Invalid role"

    bad_both = _register(client, role="Superuser", password="abcd")
    assert bad_both.status_code == 400
    assert bad_both.json() == {"error": "Invalid role"}

    ok = _register(client)
    assert ok.status_code == 201
    body = ok.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "robin@example.com"
    assert body["user"]["role"] == "Booker"
    assert "password" not in body["user"]


def test_registration_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": "x@example.com", "password": "abcdef"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"


def test_registration_duplicate_email(client):
    assert _register(client).status_code == 201

    response = _register(client, name="Other Robin")

    assert response.status_code == 409
    assert response.json()["error"] == "User with this email already exists"


def test_login_sets_session(client):
    _register(client)

    response = client.post("/api/auth/login", json={"email": "robin@example.com", "password": "abcdef"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "Booker"
    session = client.get("/api/auth/session")
    assert session.status_code == 200
    assert session.json()["user"]["display_name"] == "Robin"
    assert session.json()["user"]["role"] == "Booker"


def test_login_failures_are_indistinguishable(client):
    _register(client)

    wrong_password = client.post("/api/auth/login", json={"email": "robin@example.com", "password": "nope123"})
    unknown_user = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "abcdef"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid email or password"}


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "robin@example.com"})

    assert response.status_code == 400


def test_logout_clears_session(client):
    _register(client)
    client.post("/api/auth/login", json={"email": "robin@example.com", "password": "abcdef"})

    assert client.post("/api/auth/logout").status_code == 200

    session = client.get("/api/auth/session")
    assert session.status_code == 401
    assert session.json() == {"error": "Not authenticated"}


def test_password_is_stored_hashed(client):
    from venuedesk import queries

    _register(client)
    with client.app.state.database.runner() as runner:
        row = queries.get_user_credentials(runner, "robin@example.com")

    assert row["password"] != "abcdef"
    assert row["password"].startswith("$2")
