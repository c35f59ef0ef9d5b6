"""
End-to-end tests: HTTP requests against the app and a seeded SQLite file
"""
from fastapi.testclient import TestClient

from users_api.app.main import create_app


def by_id(users):
    return sorted(users, key=lambda user: user["id"])


class TestUsersApi:

    def test_list_users(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        assert by_id(response.json()) == [{"id": 1, "name": "Mimi"}, {"id": 2, "name": "Mickey"}]

    def test_get_user(self, client):
        response = client.get("/users/1")

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "Mimi"}

    def test_get_missing_user(self, client):
        response = client.get("/users/99")

        assert response.status_code == 404
        assert response.content == b""

    def test_create_user(self, client):
        response = client.post("/users", json={"id": 3, "name": "Donald"})

        assert response.status_code == 201
        location = response.headers["location"]
        assert location.endswith("/3")
        assert client.get(location).json() == {"id": 3, "name": "Donald"}
        assert client.get("/users/3").json() == {"id": 3, "name": "Donald"}

    def test_create_existing_user(self, client):
        response = client.post("/users", json={"id": 2, "name": "Mickey2"})

        assert response.status_code == 409
        assert response.headers["location"].endswith("/2")
        assert response.content == b""
        assert client.get("/users/2").json() == {"id": 2, "name": "Mickey"}

    def test_create_user_with_taken_name(self, client):
        response = client.post("/users", json={"id": 3, "name": "Mimi"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}
        assert client.get("/users/3").status_code == 404

    def test_update_user(self, client):
        response = client.put("/users", json={"id": 1, "name": "Mimiiii"})

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/users/1").json() == {"id": 1, "name": "Mimiiii"}

    def test_update_missing_user(self, client):
        response = client.put("/users", json={"id": 42, "name": "Nobody"})

        assert response.status_code == 404
        assert client.get("/users/42").status_code == 404

    def test_delete_user(self, client):
        response = client.delete("/users/1")

        assert response.status_code == 200
        assert response.content == b""
        assert client.get("/users/1").status_code == 404

    def test_delete_missing_user(self, client):
        response = client.delete("/users/42")

        assert response.status_code == 404
        assert response.content == b""

    def test_oversized_ids_are_rejected(self, client):
        assert client.get("/users/99999999999999999999").status_code == 422
        assert client.delete(f"/users/{2**64}").status_code == 422
        assert client.post("/users", json={"id": 2**64, "name": "Big"}).status_code == 422
        assert by_id(client.get("/users").json()) == [{"id": 1, "name": "Mimi"}, {"id": 2, "name": "Mickey"}]

    def test_extreme_ids_round_trip(self, client):
        for user_id, name in [(2**63 - 1, "Max"), (-(2**63), "Min")]:
            assert client.post("/users", json={"id": user_id, "name": name}).status_code == 201
            assert client.get(f"/users/{user_id}").json() == {"id": user_id, "name": name}

    def test_state_survives_restart(self, settings):
        with TestClient(create_app(settings)) as first:
            first.post("/users", json={"id": 3, "name": "Donald"})

        with TestClient(create_app(settings)) as restarted:
            assert by_id(restarted.get("/users").json()) == [
                {"id": 1, "name": "Mimi"},
                {"id": 2, "name": "Mickey"},
                {"id": 3, "name": "Donald"},
            ]
