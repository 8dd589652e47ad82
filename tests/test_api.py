"""HTTP surface: status codes, error bodies and wire formats."""

from tests.conftest import ALICE, BOB, CAROL, PASSWORD


async def test_root_and_health(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json()["api"] == "/api/v1"

    res = await client.get("/health")
    assert res.json() == {"status": "healthy", "services": {"storage": "healthy", "redis": "disabled"}}


async def test_register_then_login(client):
    res = await client.post("/api/v1/auth/register", json={
        "email": "dave@example.com",
        "password": "pw-1234",
        "password_confirmation": "pw-1234",
        "first_name": "Dave",
        "last_name": "Doe",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "dave@example.com"
    assert body["token"]["token_type"] == "Bearer"

    res = await client.post("/api/v1/auth/login", json={"email": "dave@example.com", "password": "pw-1234"})
    assert res.status_code == 200
    token = res.json()["access_token"]

    res = await client.get("/api/v1/users/profile", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["first_name"] == "Dave"


async def test_register_duplicate_conflicts(client):
    res = await client.post("/api/v1/auth/register", json={
        "email": ALICE,
        "password": "pw",
        "password_confirmation": "pw",
        "first_name": "Alice",
        "last_name": "Again",
    })
    assert res.status_code == 409
    assert res.json()["code"] == "ALREADY_EXISTS"


async def test_register_mismatched_confirmation(client):
    res = await client.post("/api/v1/auth/register", json={
        "email": "erin@example.com",
        "password": "pw",
        "password_confirmation": "other",
        "first_name": "Erin",
        "last_name": "Eck",
    })
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_ARGUMENT"


async def test_login_wrong_password(client):
    res = await client.post("/api/v1/auth/login", json={"email": ALICE, "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"code": "UNAUTHENTICATED", "message": "Email or password do not matched."}
    assert res.headers["www-authenticate"] == "Bearer"


async def test_login_seeded_user(client):
    res = await client.post("/api/v1/auth/login", json={"email": BOB, "password": PASSWORD})
    assert res.status_code == 200


async def test_protected_routes_require_token(client):
    for path in ["/api/v1/friends", "/api/v1/friends/requests", "/api/v1/users/profile", "/api/v1/schools"]:
        res = await client.get(path)
        assert res.status_code == 401, path
        assert res.json()["code"] == "UNAUTHENTICATED"


async def test_garbage_token_rejected(client):
    res = await client.get("/api/v1/friends", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid access token"


async def test_friend_request_flow(client, auth_headers):
    res = await client.put(
        f"/api/v1/friends/requests/{BOB}", json={"relationship": "classmate"}, headers=auth_headers(ALICE)
    )
    assert res.status_code == 200

    res = await client.get("/api/v1/friends/requests", headers=auth_headers(BOB))
    assert res.json() == {"request_to": [], "request_from": [{"email": ALICE, "relationship": "classmate"}]}

    res = await client.put(f"/api/v1/friends/requests/{ALICE}/accept", headers=auth_headers(BOB))
    assert res.status_code == 200

    res = await client.get("/api/v1/friends", headers=auth_headers(ALICE))
    friends = res.json()["friends"]
    assert [(f["friend_email"], f["relationship"]) for f in friends] == [(BOB, "classmate")]
    assert friends[0]["date_connected"] != ""

    res = await client.put(f"/api/v1/friends/requests/{BOB}", json={}, headers=auth_headers(ALICE))
    assert res.status_code == 409
    assert res.json()["code"] == "ALREADY_EXISTS"


async def test_self_request_bad_request(client, auth_headers):
    res = await client.put(f"/api/v1/friends/requests/{ALICE}", json={}, headers=auth_headers(ALICE))
    assert res.status_code == 400
    assert res.json() == {"code": "INVALID_ARGUMENT", "message": "can't be friend with yourself"}


async def test_request_to_unknown_user_not_found(client, auth_headers):
    res = await client.put("/api/v1/friends/requests/ghost@example.com", json={}, headers=auth_headers(ALICE))
    assert res.status_code == 404


async def test_accept_missing_request_fails_precondition(client, auth_headers):
    res = await client.put(f"/api/v1/friends/requests/{CAROL}/accept", headers=auth_headers(ALICE))
    assert res.status_code == 400
    assert res.json()["code"] == "FAILED_PRECONDITION"


async def test_cancel_and_reject(client, auth_headers):
    await client.put(f"/api/v1/friends/requests/{BOB}", json={}, headers=auth_headers(ALICE))
    await client.put(f"/api/v1/friends/requests/{BOB}", json={}, headers=auth_headers(CAROL))

    res = await client.delete(f"/api/v1/friends/requests/{BOB}", headers=auth_headers(ALICE))
    assert res.status_code == 200

    res = await client.delete(f"/api/v1/friends/requests/{CAROL}/reject", headers=auth_headers(BOB))
    assert res.status_code == 200

    res = await client.get("/api/v1/friends/requests", headers=auth_headers(BOB))
    assert res.json() == {"request_to": [], "request_from": []}


async def test_search_requires_a_filter(client, auth_headers):
    res = await client.get("/api/v1/users", headers=auth_headers(ALICE))
    assert res.status_code == 400
    assert res.json() == {"code": "INVALID_ARGUMENT", "message": "Must provide at least 1 params"}


async def test_search_by_name(client, auth_headers):
    res = await client.get("/api/v1/users", params={"name": "car"}, headers=auth_headers(ALICE))
    assert res.status_code == 200
    assert res.json() == {
        "count": 1,
        "users": [{"email": CAROL, "first_name": "Carol", "last_name": "Chen", "hometown": ""}],
    }


async def test_profile_update_wire_format(client, auth_headers):
    res = await client.put("/api/v1/users/profile", headers=auth_headers(ALICE), json={
        "sex": "F",
        "birthdate": "02/01/1990",
        "hometown": "Savannah",
        "interests": ["chess"],
        "education": [{"school": "Georgia Tech", "year_graduated": 2012}],
        "professional": [{"employer": "Acme", "job_title": "Engineer"}],
    })
    assert res.status_code == 200
    body = res.json()
    assert body["birthdate"] == "02/01/1990"
    assert body["education"] == [{"school": "Georgia Tech", "year_graduated": 2012}]

    res = await client.get("/api/v1/users/profile", headers=auth_headers(ALICE))
    assert res.json()["birthdate"] == "02/01/1990"
    assert res.json()["interests"] == ["chess"]


async def test_profile_without_birthdate_omits_field(client, auth_headers):
    res = await client.get("/api/v1/users/profile", headers=auth_headers(BOB))
    assert "birthdate" not in res.json()


async def test_profile_bad_birthdate(client, auth_headers):
    res = await client.put("/api/v1/users/profile", headers=auth_headers(ALICE), json={"birthdate": "1990-01-02"})
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_ARGUMENT"


async def test_profile_unknown_school(client, auth_headers):
    res = await client.put("/api/v1/users/profile", headers=auth_headers(ALICE), json={
        "education": [{"school": "Hogwarts"}],
    })
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_ARGUMENT"


async def test_catalog_routes(client, auth_headers):
    res = await client.get("/api/v1/schools", headers=auth_headers(ALICE))
    assert [s["school_name"] for s in res.json()["schools"]] == ["Georgia Tech", "Lakeside High"]

    res = await client.get("/api/v1/employers", headers=auth_headers(ALICE))
    assert res.json() == {"employers": [{"employer_name": "Acme"}, {"employer_name": "Globex"}]}
