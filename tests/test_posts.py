# tests/test_posts.py
"""Tests for post-related endpoints."""

from datetime import datetime, timedelta
from unittest.mock import ANY, Mock

import pytest
from fastapi import status

from themeboard.api.endpoints import posts as posts_endpoints
from tests.conftest import THEME_ID, post_payload


def test_create_post_success(client, theme, user_auth, user_headers) -> None:
    response = client.post("/post", json=post_payload(images=["http://img/1.png"]), headers=user_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["authorId"] == user_auth["userId"]
    assert data["message"] == "hi"
    assert data["images"] == ["http://img/1.png"]
    assert data["themeId"] == THEME_ID
    assert data["likes"] == 0
    assert data["comments"] == []


def test_create_post_requires_session(client, theme, monkeypatch) -> None:
    create_mock = Mock()
    monkeypatch.setattr(posts_endpoints, "create_new_post", create_mock)

    response = client.post("/post", json=post_payload())

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    create_mock.assert_not_called()


def test_create_post_auth_checked_before_body(client, monkeypatch) -> None:
    """An unauthenticated, malformed request fails authentication, not validation."""
    create_mock = Mock()
    monkeypatch.setattr(posts_endpoints, "create_new_post", create_mock)

    response = client.post("/post", json={"images": "nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    create_mock.assert_not_called()


def test_create_post_invalid_body(client, theme, user_headers) -> None:
    response = client.post("/post", json={"message": "", "themeId": THEME_ID}, headers=user_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["field"] == "message"


def test_create_post_missing_theme_id(client, theme, user_headers) -> None:
    response = client.post("/post", json={"message": "hi"}, headers=user_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert any(e["field"] == "themeId" for e in response.json()["errors"])


def test_create_post_unknown_theme(client, theme, user_headers) -> None:
    response = client.post("/post", json=post_payload(themeId="missing"), headers=user_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Theme not found"}


def test_get_post(client, test_post) -> None:
    response = client.get(f"/post/{test_post['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "First post"


def test_timestamps_carry_utc_offset(client, test_post, test_comment) -> None:
    data = client.get(f"/post/{test_post['id']}").json()
    for stamp in (test_post["createdAt"], data["createdAt"], data["comments"][0]["createdAt"]):
        parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
        assert parsed.utcoffset() == timedelta(0)


def test_get_post_not_found(client) -> None:
    response = client.get("/post/does-not-exist")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Post not found"}


def test_anonymous_post_hides_author_from_public(client, theme, user_auth, user_headers) -> None:
    created = client.post("/post", json=post_payload(anonymous=True), headers=user_headers).json()
    assert created["authorId"] == user_auth["userId"]

    public = client.get(f"/post/{created['id']}").json()
    assert public["anonymous"] is True
    assert public["authorId"] is None


def test_update_post(client, test_post, user_headers) -> None:
    response = client.put(
        f"/post/{test_post['id']}",
        json=post_payload(message="edited", images=["a.png"], anonymous=True),
        headers=user_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "edited"
    assert data["images"] == ["a.png"]
    assert data["anonymous"] is True


def test_update_post_not_author(client, test_post, other_headers) -> None:
    response = client.put(
        f"/post/{test_post['id']}",
        json=post_payload(message="hijack"),
        headers=other_headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/post/{test_post['id']}").json()["message"] == "First post"


def test_update_post_not_found(client, theme, user_headers) -> None:
    response = client.put("/post/missing", json=post_payload(), headers=user_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post(client, test_post, test_comment, user_headers) -> None:
    response = client.delete(f"/post/{test_post['id']}", headers=user_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {}
    assert client.get(f"/post/{test_post['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_not_author(client, test_post, other_headers) -> None:
    response = client.delete(f"/post/{test_post['id']}", headers=other_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/post/{test_post['id']}").status_code == status.HTTP_200_OK


def test_delete_post_without_session(client, test_post) -> None:
    response = client.delete(f"/post/{test_post['id']}")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_like_post_is_idempotent(client, test_post, user_headers) -> None:
    url = f"/post/like/{test_post['id']}"
    for _ in range(2):
        assert client.post(url, json={"like": True}, headers=user_headers).status_code == 200
    assert client.get(f"/post/{test_post['id']}").json()["likes"] == 1

    for _ in range(2):
        assert client.post(url, json={"like": False}, headers=user_headers).status_code == 200
    assert client.get(f"/post/{test_post['id']}").json()["likes"] == 0


def test_like_post_counts_each_user(client, test_post, user_headers, other_headers) -> None:
    url = f"/post/like/{test_post['id']}"
    client.post(url, json={"like": True}, headers=user_headers)
    client.post(url, json={"like": True}, headers=other_headers)
    assert client.get(f"/post/{test_post['id']}").json()["likes"] == 2


@pytest.mark.parametrize("like", [False, True])
def test_like_flag_passed_through_unchanged(client, user_auth, user_headers, monkeypatch, like) -> None:
    like_mock = Mock()
    monkeypatch.setattr(posts_endpoints, "like_post", like_mock)

    response = client.post("/post/like/p1", json={"like": like}, headers=user_headers)

    assert response.status_code == status.HTTP_200_OK
    like_mock.assert_called_once_with(ANY, user_auth["userId"], "p1", like)


@pytest.mark.parametrize("body", [{}, {"like": "true"}, {"like": 1}])
def test_like_requires_boolean(client, test_post, user_headers, body) -> None:
    response = client.post(f"/post/like/{test_post['id']}", json=body, headers=user_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["field"] == "like"


def test_like_missing_post(client, user_headers) -> None:
    response = client.post("/post/like/missing", json={"like": True}, headers=user_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


class TestFeed:
    """GET /posts: generic vs personalised pages."""

    def _create(self, client, headers, count, **overrides):
        return [
            client.post("/post", json=post_payload(message=f"post {i}", **overrides), headers=headers).json()
            for i in range(count)
        ]

    def test_generic_feed_newest_first(self, client, theme, user_headers) -> None:
        created = self._create(client, user_headers, 2)
        response = client.get("/posts")
        assert response.status_code == status.HTTP_200_OK
        ids = [p["id"] for p in response.json()["posts"]]
        assert ids == [created[1]["id"], created[0]["id"]]

    def test_offset_pagination(self, client, theme, user_headers) -> None:
        self._create(client, user_headers, 4)
        first = client.get("/posts", params={"offset": 0}).json()["posts"]
        second = client.get("/posts", params={"offset": "3"}).json()["posts"]
        assert len(first) == 3
        assert len(second) == 1
        assert {p["id"] for p in first}.isdisjoint({p["id"] for p in second})

    @pytest.mark.parametrize("offset", ["-1", "abc"])
    def test_invalid_offset(self, client, offset) -> None:
        response = client.get("/posts", params={"offset": offset})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "offset"

    def test_personalised_feed_differs(self, client, test_post, user_headers) -> None:
        client.post(f"/post/like/{test_post['id']}", json={"like": True}, headers=user_headers)

        personal = client.get("/posts", headers=user_headers).json()["posts"]
        generic = client.get("/posts").json()["posts"]

        assert personal[0]["liked"] is True
        assert generic[0]["liked"] is None

    def test_mismatched_id_gets_generic_feed(
        self, client, test_post, user_headers, other_auth
    ) -> None:
        headers = {**user_headers, "id": other_auth["userId"]}
        response = client.get("/posts", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["posts"][0]["liked"] is None

    def test_invalid_token_gets_generic_feed(self, client, test_post, user_auth) -> None:
        headers = {"Authorization": "Bearer junk", "id": user_auth["userId"]}
        response = client.get("/posts", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["posts"][0]["liked"] is None

    def test_own_anonymous_posts_visible_to_author(
        self, client, theme, user_auth, user_headers, other_headers
    ) -> None:
        self._create(client, user_headers, 1, anonymous=True)

        mine = client.get("/posts", headers=user_headers).json()["posts"][0]
        theirs = client.get("/posts", headers=other_headers).json()["posts"][0]
        public = client.get("/posts").json()["posts"][0]

        assert mine["authorId"] == user_auth["userId"]
        assert theirs["authorId"] is None
        assert theirs["liked"] is False
        assert public["authorId"] is None

    def test_feed_calls_collaborator_with_confirmed_id(
        self, client, user_auth, user_headers, monkeypatch
    ) -> None:
        feed_mock = Mock(return_value={"posts": []})
        monkeypatch.setattr(posts_endpoints, "get_all_posts", feed_mock)

        client.get("/posts", params={"offset": 2}, headers=user_headers)
        client.get("/posts", params={"offset": 2})

        assert feed_mock.call_args_list[0].args[1:] == (2, user_auth["userId"])
        assert feed_mock.call_args_list[1].args[1:] == (2, None)
