# =============================================================================
# tests/test_posts_api.py - Post Endpoint Tests
# =============================================================================
# End-to-end tests through the pipeline for /posts:
# - reads are public and populate authors without secrets
# - writes need a token, validate their body, and keep Post.authors and
#   User.posts mirrored
# - missing ids give 404 with the id in the message
# =============================================================================

import pytest

from lib.store import POSTS, USERS
from tests.helpers import API, run


@pytest.fixture
def author(make_user, sample_address):
    return make_user(address=sample_address)


@pytest.fixture
def created_post(client, author, auth_headers):
    response = client.post(
        f"{API}/posts",
        json={"title": "T", "content": "C"},
        headers=auth_headers(author),
    )
    assert response.status_code == 201
    return response.json()


# =============================================================================
# Create
# =============================================================================

class TestCreatePost:

    def test_create_sets_caller_as_only_author(self, client, store, author, created_post):
        """The new post lists the caller and the caller lists the post."""
        assert created_post["title"] == "T"
        assert created_post["content"] == "C"
        assert created_post["authors"] == [
            {"id": author["id"], "name": author["name"], "email": author["email"]}
        ]

        stored_user = run(store.find_one(USERS, author["id"]))
        assert stored_user["posts"] == [created_post["id"]]
        stored_post = run(store.find_one(POSTS, created_post["id"]))
        assert stored_post["authors"] == [author["id"]]

    def test_author_projection_hides_secrets(self, created_post):
        author = created_post["authors"][0]

        assert "password" not in author
        assert "address" not in author
        assert "posts" not in author

    def test_client_supplied_authors_are_ignored(self, client, make_user, author, auth_headers):
        other = make_user(name="Other", email="other@example.com")

        response = client.post(
            f"{API}/posts",
            json={"title": "T", "content": "C", "authors": [other["id"]]},
            headers=auth_headers(author),
        )

        assert [a["id"] for a in response.json()["authors"]] == [author["id"]]

    def test_missing_title_is_rejected_and_nothing_stored(self, client, store, author, auth_headers):
        response = client.post(
            f"{API}/posts",
            json={"content": "C"},
            headers=auth_headers(author),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert {"field": "title", "constraint": "required", "message": "title is required"} in body["errors"]
        assert run(store.find(POSTS)) == []
        assert run(store.find_one(USERS, author["id"]))["posts"] == []

    def test_invalid_json_body(self, client, author, auth_headers):
        response = client.post(
            f"{API}/posts",
            content=b"{not json",
            headers={**auth_headers(author), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["constraint"] == "is_json"

    def test_requires_authentication(self, client, store):
        response = client.post(f"{API}/posts", json={"title": "T", "content": "C"})

        assert response.status_code == 401
        assert run(store.find(POSTS)) == []

    def test_guard_runs_before_validation(self, client):
        """An anonymous invalid request is rejected for auth, not validation."""
        response = client.post(f"{API}/posts", json={})

        assert response.status_code == 401
        assert "errors" not in response.json()


# =============================================================================
# Read
# =============================================================================

class TestReadPosts:

    def test_get_round_trip(self, client, created_post):
        """A created post reads back identically."""
        response = client.get(f"{API}/posts/{created_post['id']}")

        assert response.status_code == 200
        assert response.json() == created_post

    def test_user_lists_the_post(self, client, author, created_post):
        response = client.get(f"{API}/users/{author['id']}")

        assert response.status_code == 200
        assert created_post["id"] in response.json()["posts"]

    def test_list_populates_authors(self, client, created_post):
        response = client.get(f"{API}/posts")

        assert response.status_code == 200
        assert response.json() == [created_post]

    def test_list_empty(self, client):
        response = client.get(f"{API}/posts")

        assert response.status_code == 200
        assert response.json() == []

    def test_get_missing_post(self, client):
        response = client.get(f"{API}/posts/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert "does-not-exist" in body["message"]
        assert body["code"] == "POST_NOT_FOUND"

    def test_reads_are_public(self, client, created_post):
        """No token needed for list or get."""
        assert client.get(f"{API}/posts").status_code == 200
        assert client.get(f"{API}/posts/{created_post['id']}").status_code == 200

    def test_deleted_author_is_skipped(self, client, store, author, created_post):
        run(store.delete(USERS, author["id"]))

        response = client.get(f"{API}/posts/{created_post['id']}")

        assert response.status_code == 200
        assert response.json()["authors"] == []


# =============================================================================
# Update
# =============================================================================

class TestModifyPost:

    def test_partial_update_only_content(self, client, store, author, auth_headers, created_post):
        response = client.patch(
            f"{API}/posts/{created_post['id']}",
            json={"content": "new content"},
            headers=auth_headers(author),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "new content"
        assert body["title"] == created_post["title"]
        assert body["authors"] == created_post["authors"]
        assert run(store.find_one(POSTS, created_post["id"]))["authors"] == [author["id"]]

    def test_authors_cannot_be_patched(self, client, make_user, author, auth_headers, created_post):
        other = make_user(name="Other", email="other@example.com")

        response = client.patch(
            f"{API}/posts/{created_post['id']}",
            json={"authors": [other["id"]]},
            headers=auth_headers(author),
        )

        assert response.status_code == 200
        assert response.json()["authors"] == created_post["authors"]

    def test_patch_type_error(self, client, author, auth_headers, created_post):
        response = client.patch(
            f"{API}/posts/{created_post['id']}",
            json={"title": 5},
            headers=auth_headers(author),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "title"

    def test_patch_missing_post(self, client, author, auth_headers):
        response = client.patch(
            f"{API}/posts/nope",
            json={"title": "x"},
            headers=auth_headers(author),
        )

        assert response.status_code == 404
        assert "nope" in response.json()["message"]

    def test_empty_patch_missing_post(self, client, author, auth_headers):
        response = client.patch(f"{API}/posts/nope", json={}, headers=auth_headers(author))

        assert response.status_code == 404

    def test_patch_requires_authentication(self, client, created_post):
        response = client.patch(f"{API}/posts/{created_post['id']}", json={"title": "x"})

        assert response.status_code == 401


# =============================================================================
# Delete
# =============================================================================

class TestDeletePost:

    def test_delete_then_delete_again(self, client, author, auth_headers, created_post):
        """The second delete is a 404, not a success."""
        url = f"{API}/posts/{created_post['id']}"

        first = client.delete(url, headers=auth_headers(author))
        second = client.delete(url, headers=auth_headers(author))

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 404
        assert created_post["id"] in second.json()["message"]

    def test_delete_leaves_back_reference_but_readers_filter_it(
        self, client, store, author, auth_headers, created_post
    ):
        client.delete(f"{API}/posts/{created_post['id']}", headers=auth_headers(author))

        assert run(store.find_one(USERS, author["id"]))["posts"] == [created_post["id"]]
        response = client.get(f"{API}/users/{author['id']}/posts")
        assert response.status_code == 200
        assert response.json() == []

    def test_delete_requires_authentication(self, client, store, created_post):
        response = client.delete(f"{API}/posts/{created_post['id']}")

        assert response.status_code == 401
        assert run(store.find_one(POSTS, created_post["id"])) is not None
