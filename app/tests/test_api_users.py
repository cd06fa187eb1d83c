async def test_user_can_read_own_profile(client, seeded_test_data, auth_headers):
    voter_id = seeded_test_data["user_ids"][0]
    response = await client.get(f"/api/v1/users/{voter_id}", headers=auth_headers(voter_id))
    assert response.status_code == 200
    assert response.json()["username"] == "voter1"
    assert response.json()["is_admin"] is False
    assert "password_hash" not in response.json()


async def test_user_cannot_read_someone_elses_profile(client, seeded_test_data, auth_headers):
    voter1, voter2 = seeded_test_data["user_ids"][:2]
    response = await client.get(f"/api/v1/users/{voter2}", headers=auth_headers(voter1))
    assert response.status_code == 403
    assert response.json() == {"error": "Not authorized"}


async def test_admin_can_read_any_profile(client, seeded_test_data, auth_headers):
    admin = auth_headers(seeded_test_data["admin_id"])
    voter_id = seeded_test_data["user_ids"][2]
    response = await client.get(f"/api/v1/users/{voter_id}", headers=admin)
    assert response.status_code == 200
    assert response.json()["username"] == "voter3"

    response = await client.get("/api/v1/users/999999", headers=admin)
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


async def test_profile_requires_authentication(client, seeded_test_data):
    response = await client.get(f"/api/v1/users/{seeded_test_data['user_ids'][0]}")
    assert response.status_code == 401


async def test_user_listing_is_admin_only(client, seeded_test_data, auth_headers):
    response = await client.get("/api/v1/users", headers=auth_headers(seeded_test_data["user_ids"][0]))
    assert response.status_code == 403

    response = await client.get("/api/v1/users", headers=auth_headers(seeded_test_data["admin_id"]))
    assert response.status_code == 200
    usernames = [u["username"] for u in response.json()]
    assert sorted(usernames) == ["admin", "voter1", "voter2", "voter3"]
    assert usernames[0] == "admin"


async def test_verify_token(client, seeded_test_data, auth_headers):
    voter_id = seeded_test_data["user_ids"][1]
    response = await client.get("/api/v1/auth/verify", headers=auth_headers(voter_id))
    assert response.status_code == 200
    assert response.json()["valid"] is True
    assert response.json()["user"]["id"] == voter_id
    assert response.json()["user"]["username"] == "voter2"

    assert (await client.get("/api/v1/auth/verify")).status_code == 401

    response = await client.get("/api/v1/auth/verify", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
