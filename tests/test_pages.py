"""Tests for the server-rendered character pages.

Tests for:
- GET /index - Welcome page
- GET /list - Character list page
- GET /new - Creation form
- POST /new - Unvalidated form submission with redirect to /list
"""

import math

import pytest
from httpx import ASGITransport, AsyncClient

from character_api.main import create_app


class TestStaticPages:
    """Tests for the welcome page and the creation form."""

    @pytest.mark.asyncio
    async def test_index_renders_welcome(self) -> None:
        """GET /index renders the welcome page."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/index")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "<title>Welcome</title>" in response.text

    @pytest.mark.asyncio
    async def test_new_renders_form(self) -> None:
        """GET /new renders a form posting every character field to /new."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/new")

        assert response.status_code == 200
        assert "New character" in response.text
        assert 'action="/new"' in response.text
        for field in ("id", "name", "job", "weapon", "level"):
            assert f'name="{field}"' in response.text


class TestListPage:
    """Tests for GET /list."""

    @pytest.mark.asyncio
    async def test_list_shows_seed_characters(self) -> None:
        """Every seed character name appears on the page."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.get("/list")

        assert response.status_code == 200
        assert "Character list" in response.text
        assert "Cloud Strife" in response.text
        assert "Tifa Lockhart" in response.text
        assert "Aerith Gainsborough" in response.text

    @pytest.mark.asyncio
    async def test_list_reflects_api_changes(self) -> None:
        """Characters created through the API show up on the page."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            await client.post(
                "/characters",
                json={
                    "id": 4,
                    "name": "Barret",
                    "job": "Gunner",
                    "weapon": "Gun-arm",
                    "level": 30,
                },
            )
            await client.delete("/characters/1")
            response = await client.get("/list")

        assert "Barret" in response.text
        assert "Cloud Strife" not in response.text


class TestSubmitNewCharacter:
    """Tests for POST /new."""

    @pytest.mark.asyncio
    async def test_submit_redirects_to_list(self) -> None:
        """A submission is stored with numeric id and level, then redirects."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.post(
                "/new",
                data={
                    "id": "4",
                    "name": "Barret",
                    "job": "Gunner",
                    "weapon": "Gun-arm",
                    "level": "30",
                },
            )
            character = await client.get("/characters/4")

        assert response.status_code == 302
        assert response.headers["location"] == "/list"
        assert character.json() == {
            "id": 4,
            "name": "Barret",
            "job": "Gunner",
            "weapon": "Gun-arm",
            "level": 30,
        }

    @pytest.mark.asyncio
    async def test_submit_skips_validation(self) -> None:
        """Duplicates and out-of-range levels are stored anyway."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.post(
                "/new",
                data={
                    "id": "1",
                    "name": "Cloud Strife",
                    "job": "Soldier",
                    "weapon": "Buster sword",
                    "level": "500",
                },
            )

        assert response.status_code == 302
        characters = app.state.character_store.list_characters()
        assert len(characters) == 4
        assert characters[-1]["id"] == 1
        assert characters[-1]["level"] == 500

    @pytest.mark.asyncio
    async def test_submit_stores_non_numeric_values_as_null(self) -> None:
        """id and level that are not numbers are kept as NaN and sent as null."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.post(
                "/new", data={"id": "abc", "name": "Red XIII"}
            )
            listing = await client.get("/characters")

        assert response.status_code == 302
        assert listing.json()[-1] == {"id": None, "name": "Red XIII", "level": None}
        stored = app.state.character_store.list_characters()[-1]
        assert math.isnan(stored["id"])
        assert math.isnan(stored["level"])

    @pytest.mark.asyncio
    async def test_submit_without_id_does_not_block_null_id(self) -> None:
        """A form record with no id is NaN, which never clashes with a null id."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            await client.post("/new", data={"name": "Nameless"})
            response = await client.post(
                "/characters",
                json={
                    "id": None,
                    "name": "Zack",
                    "job": "Soldier",
                    "weapon": "Sword",
                    "level": 10,
                },
            )

        assert response.status_code == 201
        assert response.json() == {"message": "Character created"}

    @pytest.mark.asyncio
    async def test_multipart_submission_keeps_listing_readable(self) -> None:
        """File parts are never stored, so later listings still serialise."""
        app = create_app()

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            response = await client.post(
                "/new",
                data={"id": "7"},
                files={"name": ("a.txt", b"hello", "text/plain")},
            )
            listing = await client.get("/characters")
            page = await client.get("/list")

        assert response.status_code == 302
        assert listing.status_code == 200
        assert listing.json()[-1] == {"id": None, "level": None}
        assert page.status_code == 200


class TestFormNumber:
    """Tests for form_number()."""

    def test_converts_numeric_strings(self) -> None:
        from character_api.routers.pages import form_number

        assert form_number("12") == 12
        assert form_number("2.5") == 2.5
        assert form_number("") == 0

    def test_missing_and_invalid_values_become_nan(self) -> None:
        from character_api.routers.pages import form_number

        assert math.isnan(form_number(None))
        assert math.isnan(form_number("abc"))
        assert form_number("Infinity") == math.inf
