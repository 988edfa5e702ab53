"""HTTP tests through the FastAPI app."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_headers, seed_news

NEWS_BODY = {
    "title_en": "Hello World",
    "title_te": "హలో వరల్డ్",
    "description_en": "Body",
    "description_te": "వ్యాసం",
    "category_en": "Politics",
    "category_te": "రాజకీయాలు",
    "tags_en": "election, results",
    "main_url": "https://cdn.example.com/cover.jpg",
}


class TestAuth:
    """Test registration, login and token refresh."""

    @pytest.mark.asyncio
    async def test_register_login_me_refresh(self, client) -> None:
        """Test the full token lifecycle."""
        response = await client.post("/auth/register", json={
            "email": "Ravi@Example.com",
            "username": "ravi",
            "password": "Secret123",
            "role": "writer",
        })
        assert response.status_code == 201
        assert response.json()["email"] == "ravi@example.com"
        assert response.json()["role"] == "writer"

        response = await client.post("/auth/login", json={"email": "ravi@example.com", "password": "Secret123"})
        assert response.status_code == 200
        tokens = response.json()

        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
        assert response.status_code == 200
        assert response.json()["username"] == "ravi"

        response = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert response.status_code == 200
        assert response.json()["access_token"]

    @pytest.mark.asyncio
    async def test_admin_cannot_self_register(self, client) -> None:
        """Test the admin role is not open to registration."""
        response = await client.post("/auth/register", json={
            "email": "boss@example.com", "username": "boss", "password": "Secret123", "role": "admin",
        })
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, writer) -> None:
        """Test bad credentials are refused."""
        response = await client.post("/auth/login", json={"email": writer.email, "password": "Wrong1234"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_access_token_is_not_a_refresh_token(self, client, writer) -> None:
        """Test refresh only accepts refresh tokens."""
        access = auth_headers(writer)["Authorization"].split()[1]
        response = await client.post("/auth/refresh", json={"refresh_token": access})
        assert response.status_code == 401


class TestNewsRoutes:
    """Test the news endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client, writer) -> None:
        """Test a created article can be fetched by slug and id."""
        response = await client.post("/news/", json=NEWS_BODY, headers=auth_headers(writer))
        assert response.status_code == 201
        item = response.json()["item"]
        assert item["slug"] == "hello-world"
        assert item["tags_en"] == ["election", "results"]

        by_slug = await client.get("/news/n/hello-world")
        by_id = await client.get(f"/news/{item['id']}")
        assert by_slug.json()["item"]["id"] == item["id"]
        assert by_id.json()["item"]["slug"] == "hello-world"

    @pytest.mark.asyncio
    async def test_reader_forbidden(self, client, reader) -> None:
        """Test readers get 403 with the failure envelope."""
        response = await client.post("/news/", json=NEWS_BODY, headers=auth_headers(reader))
        assert response.status_code == 403
        assert response.json()["status"] == "fail"

    @pytest.mark.asyncio
    async def test_edit_and_delete(self, client, writer, other_writer) -> None:
        """Test authors edit and delete, others are refused."""
        created = (await client.post("/news/", json=NEWS_BODY, headers=auth_headers(writer))).json()["item"]

        refused = await client.put(f"/news/{created['id']}", json={"title_en": "Mine now"}, headers=auth_headers(other_writer))
        assert refused.status_code == 403

        edited = await client.put(f"/news/{created['id']}", json={"title_en": "Fresh Title"}, headers=auth_headers(writer))
        assert edited.status_code == 200
        assert edited.json()["item"]["slug"] == "fresh-title"

        deleted = await client.delete(f"/news/{created['id']}", headers=auth_headers(writer))
        assert deleted.status_code == 200
        assert (await client.get("/news/n/fresh-title")).status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_slug(self, client) -> None:
        """Test missing articles answer 404 with a message."""
        response = await client.get("/news/n/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"status": "fail", "message": "News not found"}


class TestListing:
    """Test listing envelopes and parameter validation."""

    @pytest.mark.asyncio
    async def test_cursor_envelope(self, client, session, writer) -> None:
        """Test the default listing is cursor paginated."""
        await seed_news(session, 12, writer)

        first = (await client.get("/news/filter", params={"limit": 5})).json()
        assert first["status"] == "success"
        assert len(first["items"]) == 5
        assert set(first["pagination"]) == {
            "next_cursor", "prev_cursor", "has_more", "has_prev_page", "items_per_page"
        }
        assert first["pagination"]["has_more"] is True
        assert first["pagination"]["has_prev_page"] is False

        second = (await client.get("/news/filter", params={"limit": 5, "cursor": first["pagination"]["next_cursor"]})).json()
        assert {i["id"] for i in first["items"]}.isdisjoint({i["id"] for i in second["items"]})
        assert second["pagination"]["has_prev_page"] is True
        assert second["pagination"]["prev_cursor"] is not None

    @pytest.mark.asyncio
    async def test_offset_envelope(self, client, session, writer) -> None:
        """Test passing page switches to offset pagination."""
        await seed_news(session, 12, writer)

        body = (await client.get("/news/filter", params={"page": 2, "limit": 5})).json()

        assert len(body["items"]) == 5
        assert body["pagination"] == {
            "current_page": 2,
            "total_pages": 3,
            "total_items": 12,
            "items_per_page": 5,
            "has_next_page": True,
            "has_prev_page": True,
        }

    @pytest.mark.asyncio
    async def test_filters_from_query(self, client, session, writer) -> None:
        """Test searchText and category query parameters."""
        await seed_news(session, 2, writer, prefix="cricket", category_en="Sports")
        await seed_news(session, 2, writer, prefix="budget")

        sports = (await client.get("/news/filter", params={"category": "sports"})).json()
        search = (await client.get("/news/filter", params={"searchText": "budget"})).json()

        assert {i["slug"] for i in sports["items"]} == {"cricket-0", "cricket-1"}
        assert {i["slug"] for i in search["items"]} == {"budget-0", "budget-1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"limit": 0},
        {"limit": 500},
        {"cursor": "garbage"},
        {"page": 0},
        {"time": "fortnight"},
        {"page": 1, "cursor": "eyJjcmVhdGVkX2F0IjogIjIwMjQtMDEtMDFUMDA6MDA6MDAiLCAiaWQiOiAxfQ"},
    ])
    async def test_bad_parameters(self, client, params) -> None:
        """Test invalid pagination and filter values answer 400."""
        response = await client.get("/news/filter", params=params)
        assert response.status_code == 400
        assert response.json()["status"] == "fail"


class TestOtherKinds:
    """Test gallery, video and comment routes."""

    @pytest.mark.asyncio
    async def test_video_by_slug(self, client, writer) -> None:
        """Test videos are created from a YouTube id and fetched under /v/."""
        response = await client.post("/videos/", json={
            "title_en": "Official Trailer", "title_te": "ట్రైలర్", "yt_id": "dQw4w9WgXcQ",
        }, headers=auth_headers(writer))
        assert response.status_code == 201

        fetched = (await client.get("/videos/v/official-trailer")).json()["item"]
        assert fetched["video_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    @pytest.mark.asyncio
    async def test_gallery_listing(self, client, writer) -> None:
        """Test gallery listings share the envelope."""
        await client.post("/gallery/", json={
            "name_en": "Stars", "name_te": "తారలు",
            "title_en": "Red Carpet", "title_te": "రెడ్ కార్పెట్",
            "description_en": "Photos", "description_te": "ఫోటోలు",
            "category_en": "Events", "category_te": "ఈవెంట్స్",
            "gallery_pics": ["https://cdn.example.com/1.jpg"],
        }, headers=auth_headers(writer))

        body = (await client.get("/gallery/filter")).json()
        assert [item["slug"] for item in body["items"]] == ["red-carpet"]
        assert (await client.get("/gallery/g/red-carpet")).status_code == 200

    @pytest.mark.asyncio
    async def test_comment_thread(self, client, writer, reader) -> None:
        """Test commenting, replying and listing through HTTP."""
        await client.post("/news/", json=NEWS_BODY, headers=auth_headers(writer))

        root = (await client.post("/comments/hello-world", json={"comment": "Great read"}, headers=auth_headers(reader))).json()["item"]
        reply = await client.post(f"/comments/reply/{root['id']}", json={"comment": "Thanks"}, headers=auth_headers(writer))
        assert reply.status_code == 201

        thread = (await client.get("/comments/hello-world", params={"language": "en"})).json()
        assert len(thread["items"]) == 1
        assert thread["items"][0]["replies"][0]["comment"] == "Thanks"

        deleted = await client.delete(f"/comments/{root['id']}", headers=auth_headers(reader))
        assert deleted.status_code == 200
        assert (await client.get("/comments/hello-world")).json()["items"] == []


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client) -> None:
        """Test the health endpoint reaches the database."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}


class TestWriters:
    @pytest.mark.asyncio
    async def test_writers_listing_excludes_caller(self, client, writer, other_writer, admin, reader) -> None:
        """Test the writer picker lists other staff only."""
        response = await client.get("/users/writers", headers=auth_headers(writer))

        assert response.status_code == 200
        assert [user["username"] for user in response.json()] == ["other_writer", "admin"]


class TestCommentReactions:
    """Test the like and dislike toggles over HTTP."""

    @pytest.mark.asyncio
    async def test_like_then_dislike(self, client, writer, reader) -> None:
        """Test the toggle messages and the counts they report."""
        await client.post("/news/", json=NEWS_BODY, headers=auth_headers(writer))
        root = (await client.post("/comments/hello-world", json={"comment": "Great read"}, headers=auth_headers(writer))).json()["item"]

        liked = await client.put(f"/comments/{root['id']}/like", headers=auth_headers(reader))
        assert liked.status_code == 200
        assert liked.json()["message"] == "Liked successfully"
        assert liked.json()["item"]["likes"] == 1

        disliked = (await client.put(f"/comments/{root['id']}/dislike", headers=auth_headers(reader))).json()
        assert disliked["message"] == "Disliked successfully"
        assert (disliked["item"]["likes"], disliked["item"]["dislikes"]) == (0, 1)

        removed = (await client.put(f"/comments/{root['id']}/dislike", headers=auth_headers(reader))).json()
        assert removed["message"] == "Dislike removed"
        assert removed["item"]["dislikes"] == 0


class TestConstraintErrors:
    """Test store constraint violations reach the client as bad requests."""

    @pytest.mark.asyncio
    async def test_non_slug_violation_is_400(self, client, writer, monkeypatch) -> None:
        """Test a constraint failure other than the slug answers 400 with the fail envelope."""
        async def rejecting_commit(self) -> None:
            raise IntegrityError("INSERT INTO news", {}, Exception("CHECK constraint failed: news"))

        monkeypatch.setattr(AsyncSession, "commit", rejecting_commit)

        response = await client.post("/news/", json=NEWS_BODY, headers=auth_headers(writer))

        assert response.status_code == 400
        assert response.json() == {"status": "fail", "message": "Invalid news data"}
