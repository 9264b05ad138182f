"""Tests for /api/genres."""

import pytest


class TestListGenres:
    def test_returns_all_genres(self, client, seed):
        seed.genre("genre1")
        seed.genre("genre2")

        res = client.get("/api/genres")

        assert res.status_code == 200
        names = [g["name"] for g in res.json()]
        assert names == ["genre1", "genre2"]


class TestGetGenre:
    def test_returns_genre_for_valid_id(self, client, seed):
        genre_id = seed.genre("genre1")

        res = client.get(f"/api/genres/{genre_id}")

        assert res.status_code == 200
        assert res.json() == {"id": genre_id, "name": "genre1"}

    @pytest.mark.parametrize("bad_id", ["1", "abc", "0", "-5", "99999999999999999999999"])
    def test_returns_404_for_unknown_or_malformed_id(self, client, bad_id):
        res = client.get(f"/api/genres/{bad_id}")

        assert res.status_code == 404
        assert res.json()["detail"] == "The genre with the given ID was not found."


class TestCreateGenre:
    # Happy path first; each test changes the one parameter its name refers to.
    @pytest.fixture
    def name(self):
        return "genre1"

    def post(self, client, token, name):
        headers = {"x-auth-token": token} if token else {}
        return client.post("/api/genres", json={"name": name}, headers=headers)

    def test_returns_401_if_client_is_not_logged_in(self, client, name):
        res = self.post(client, "", name)

        assert res.status_code == 401

    def test_returns_400_for_malformed_token(self, client, name):
        res = self.post(client, "not-a-token", name)

        assert res.status_code == 400
        assert res.json()["detail"] == "Invalid token."

    def test_returns_400_for_expired_token(self, client, token_for, name):
        res = self.post(client, token_for(expires_delta=-60), name)

        assert res.status_code == 400

    def test_returns_400_if_name_shorter_than_5_characters(self, client, token):
        res = self.post(client, token, "1234")

        assert res.status_code == 400
        assert res.json()["detail"].startswith("name:")

    def test_returns_400_if_name_longer_than_50_characters(self, client, token):
        res = self.post(client, token, "a" * 51)

        assert res.status_code == 400

    def test_saves_and_returns_the_genre(self, client, token, name):
        res = self.post(client, token, name)

        assert res.status_code == 200
        body = res.json()
        assert body["name"] == "genre1"
        assert client.get(f"/api/genres/{body['id']}").json() == body


class TestUpdateGenre:
    def test_returns_400_for_invalid_name(self, client, seed, token):
        genre_id = seed.genre("genre1")

        res = client.put(f"/api/genres/{genre_id}", json={"name": "1234"}, headers={"x-auth-token": token})

        assert res.status_code == 400

    def test_returns_404_if_genre_does_not_exist(self, client, store, token):
        res = client.put("/api/genres/42", json={"name": "new_genre"}, headers={"x-auth-token": token})

        assert res.status_code == 404

    def test_returns_updated_genre(self, client, seed, token):
        genre_id = seed.genre("genre1")

        res = client.put(f"/api/genres/{genre_id}", json={"name": "new_genre"}, headers={"x-auth-token": token})

        assert res.status_code == 200
        assert res.json() == {"id": genre_id, "name": "new_genre"}


class TestDeleteGenre:
    def test_returns_403_if_user_is_not_admin(self, client, seed, token):
        genre_id = seed.genre("genre1")

        res = client.delete(f"/api/genres/{genre_id}", headers={"x-auth-token": token})

        assert res.status_code == 403
        assert seed.count("genres") == 1

    def test_returns_404_if_genre_does_not_exist(self, client, store, admin_token):
        res = client.delete("/api/genres/42", headers={"x-auth-token": admin_token})

        assert res.status_code == 404

    def test_deletes_genre_for_admin(self, client, seed, admin_token):
        genre_id = seed.genre("genre1")

        res = client.delete(f"/api/genres/{genre_id}", headers={"x-auth-token": admin_token})

        assert res.status_code == 200
        assert res.json()["name"] == "genre1"
        assert client.get(f"/api/genres/{genre_id}").status_code == 404
