"""HTTP surface: routing, camelCase payloads, auth and error mapping."""

import pytest

from pressbutton.models.vote import ButtonChoice


async def _register_and_login(client, email="alice@example.com", password="secret123"):
    resp = await client.post(
        "/api/auth/register", json={"email": email, "password": password, "name": "Alice"}
    )
    assert resp.status_code == 201, resp.text
    resp = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['access_token']}"}


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_register_login_profile(client):
    user, headers = await _register_and_login(client)
    assert user["email"] == "alice@example.com"
    assert user["accountType"] == "REGULAR"
    assert "password" not in user and "passwordHash" not in user

    resp = await client.get("/api/auth/profile", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == user["id"]


async def test_duplicate_email_is_conflict(client):
    await _register_and_login(client)
    resp = await client.post(
        "/api/auth/register", json={"email": "ALICE@example.com", "password": "another1"}
    )
    assert resp.status_code == 409


async def test_login_failures(client):
    await _register_and_login(client)
    resp = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert resp.status_code == 404
    resp = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
    )
    assert resp.status_code == 401


async def test_profile_requires_valid_token(client):
    assert (await client.get("/api/auth/profile")).status_code == 401
    resp = await client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_guest_signup_returns_working_credentials(client):
    resp = await client.post("/api/auth/guest-signup")
    assert resp.status_code == 201
    body = resp.json()
    assert body["user"]["accountType"] == "GUEST"
    creds = body["guestCredentials"]

    resp = await client.post("/api/auth/login", json=creds)
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == body["user"]["id"]


async def test_question_vote_and_status_flow(client):
    user, headers = await _register_and_login(client)

    resp = await client.post(
        "/api/questions",
        headers=headers,
        json={"positiveOutcome": "  You can fly  ", "negativeOutcome": "Only on Mondays"},
    )
    assert resp.status_code == 201, resp.text
    question = resp.json()["data"]
    assert question["positiveOutcome"] == "You can fly"
    assert question["authorId"] == user["id"]
    qid = question["id"]

    resp = await client.post(f"/api/questions/{qid}/vote", json={"userId": user["id"], "choice": "PRESS"})
    assert resp.status_code == 200
    assert resp.json()["choice"] == "PRESS"
    resp = await client.post(
        f"/api/questions/{qid}/vote", json={"userId": user["id"], "choice": "DONT_PRESS"}
    )
    assert resp.json()["choice"] == "DONT_PRESS"

    resp = await client.get(f"/api/questions/{qid}/status")
    assert resp.json() == {
        "positiveVotes": 0,
        "negativeVotes": 1,
        "totalVotes": 1,
        "positivePercentage": 0.0,
    }

    resp = await client.get("/api/questions/all", params={"search": "FLY"})
    body = resp.json()
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "totalPages": 1}
    assert body["items"][0]["voteCount"] == 1


async def test_invalid_vote_choice_is_bad_request(client, make_user, make_question):
    user = await make_user()
    question = await make_question(user)
    resp = await client.post(
        f"/api/questions/{question.id}/vote", json={"userId": user.id, "choice": "MAYBE"}
    )
    assert resp.status_code == 400


async def test_create_question_validation(client, make_user):
    user = await make_user()
    resp = await client.post(
        "/api/questions/create",
        json={"positiveOutcome": "     ", "negativeOutcome": "Something bad", "authorId": user.id},
    )
    assert resp.status_code == 400

    resp = await client.post(
        "/api/questions/create",
        json={"positiveOutcome": "Something good", "negativeOutcome": "Something bad", "authorId": 777},
    )
    assert resp.status_code == 404


async def test_delete_endpoint_ownership(client, make_user, make_question):
    owner = await make_user()
    stranger = await make_user()
    question = await make_question(owner)

    resp = await client.request(
        "DELETE", "/api/questions/delete", json={"questionId": question.id, "authorId": stranger.id}
    )
    assert resp.status_code == 404
    assert (await client.get(f"/api/questions/{question.id}")).status_code == 200

    resp = await client.request(
        "DELETE", "/api/questions/delete", json={"questionId": question.id, "authorId": owner.id}
    )
    assert resp.status_code == 200
    assert resp.json() is True
    assert (await client.get(f"/api/questions/{question.id}")).status_code == 404


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 101}, {"sortBy": "random"}])
async def test_listing_query_bounds(client, params):
    resp = await client.get("/api/questions/all", params=params)
    assert resp.status_code == 400


async def test_random_skips_voted_questions(client, make_user, make_question, add_vote):
    user = await make_user()
    voted = await make_question(user)
    fresh = await make_question(user)
    await add_vote(voted, user, ButtonChoice.PRESS)

    resp = await client.get("/api/questions/random", params={"userId": user.id})
    assert resp.json()["id"] == fresh.id

    await add_vote(fresh, user, ButtonChoice.PRESS)
    resp = await client.get("/api/questions/random", params={"userId": user.id})
    assert resp.status_code == 200
    assert resp.json() is None


async def test_comments_require_auth_and_paginate(client, make_user, make_question):
    user, headers = await _register_and_login(client)
    question = await make_question(await make_user())

    resp = await client.get(f"/api/comments/question/{question.id}")
    assert resp.status_code == 401

    for i in range(3):
        resp = await client.post(
            "/api/comments", headers=headers, json={"questionId": question.id, "content": f"c{i}"}
        )
        assert resp.status_code == 201
    assert resp.json()["data"]["user"]["id"] == user["id"]

    resp = await client.get(
        f"/api/comments/question/{question.id}", headers=headers, params={"limit": 2}
    )
    body = resp.json()
    assert [c["content"] for c in body["items"]] == ["c2", "c1"]
    assert body["pagination"]["totalPages"] == 2

    resp = await client.post(
        "/api/comments", headers=headers, json={"questionId": 999, "content": "lost"}
    )
    assert resp.status_code == 404
    resp = await client.post(
        "/api/comments", headers=headers, json={"questionId": question.id, "content": "x" * 1001}
    )
    assert resp.status_code == 400
