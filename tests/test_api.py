"""Tests for the async REST client against a local aiohttp server."""

import asyncio

import aiohttp
import pytest
from aiohttp import test_utils, web

from thriphti.api import FetchError, ThriphtiApiClient
from thriphti.models import EventCategory

EVENTS = [
    {
        "id": "1",
        "title": "Lakewood Garage Sale",
        "description": "Furniture and toys",
        "location": "Lakewood, Dallas",
        "date": "2024-05-04T08:00:00+00:00",
        "category": "garage-sale",
        "imageUrl": "https://img.example.com/1.jpg",
        "price": "Free",
        "featured": True,
    },
    {
        "id": "2",
        "title": "First Monday Trade Days",
        "description": "Huge flea market",
        "location": "Canton",
        "date": "2024-05-06T07:00:00+00:00",
        "category": "flea-market",
        "imageUrl": None,
        "price": None,
        "featured": None,
    },
]

STORE = {
    "id": "7",
    "name": "Genesis Benefit Thrift",
    "description": "Donations fund the shelter",
    "location": "Lovers Lane",
    "address": "5333 Lovers Ln",
    "city": "Dallas",
    "state": "TX",
    "zipCode": "75209",
    "phone": "214-555-0100",
    "website": None,
    "hours": {"monday": {"open": "10:00", "close": "18:00"}},
    "categories": ["clothing", "furniture"],
    "images": ["https://img.example.com/a.jpg", "https://img.example.com/b.jpg"],
    "featured": False,
}


def run_with_backend(routes, scenario):
    """Serve routes under /api and run scenario(client) against them."""
    async def runner():
        app = web.Application()
        for path, handler in routes:
            app.router.add_get(f"/api{path}", handler)
        async with test_utils.TestServer(app) as server:
            async with ThriphtiApiClient(base_url=str(server.make_url("/api"))) as client:
                return await scenario(client)

    return asyncio.run(runner())


def json_handler(payload, calls=None):
    async def handler(request):
        if calls is not None:
            calls.append(request.path)
        return web.json_response(payload)
    return handler


class TestEvents:
    """Test the events resource."""

    def test_get_all_returns_events_in_order(self):
        events = run_with_backend(
            [("/events", json_handler(EVENTS))],
            lambda client: client.events.get_all(),
        )

        assert [event.to_dict() for event in events] == EVENTS
        assert events[0].category == EventCategory.GARAGE_SALE

    def test_get_by_id_not_found(self):
        with pytest.raises(FetchError) as exc_info:
            run_with_backend([], lambda client: client.events.get_by_id("42"))

        assert str(exc_info.value) == "Failed to fetch event"
        assert exc_info.value.status == 404

    def test_get_featured_uses_server_filtering(self):
        calls = []
        events = run_with_backend(
            [("/events/featured", json_handler(EVENTS, calls))],
            lambda client: client.events.get_featured(),
        )

        # Non-featured records from the server are not dropped locally
        assert len(events) == 2
        assert calls == ["/api/events/featured"]

    def test_get_all_server_error(self):
        async def broken(request):
            return web.json_response({"error": "boom"}, status=500)

        with pytest.raises(FetchError, match="^Failed to fetch events$") as exc_info:
            run_with_backend([("/events", broken)], lambda client: client.events.get_all())

        assert exc_info.value.status == 500


class TestStores:
    """Test the stores resource."""

    def test_get_by_id(self):
        store = run_with_backend(
            [("/stores/7", json_handler(STORE))],
            lambda client: client.stores.get_by_id("7"),
        )

        assert store.to_dict() == STORE
        assert store.hours["monday"].close == "18:00"

    def test_featured_failure_message(self):
        with pytest.raises(FetchError, match="^Failed to fetch featured stores$"):
            run_with_backend([], lambda client: client.stores.get_featured())


class TestArticles:
    """Test the articles resource."""

    def test_get_by_category(self):
        article = {
            "id": "a1",
            "title": "Best Thrift Stores in Oak Cliff",
            "slug": "oak-cliff-thrift",
            "excerpt": "Our picks",
            "body": "...",
            "image": "https://img.example.com/oc.jpg",
            "author": "Staff",
            "publishedAt": "2024-04-01T12:00:00Z",
            "category": "guides",
            "tags": ["oak-cliff"],
            "city": "Dallas",
        }
        articles = run_with_backend(
            [("/articles/category/guides", json_handler([article]))],
            lambda client: client.articles.get_by_category("guides"),
        )

        assert articles[0].slug == "oak-cliff-thrift"
        assert articles[0].published_at.year == 2024


class TestTransport:
    """Test failures without an HTTP response."""

    def test_connection_refused(self):
        async def scenario():
            async with ThriphtiApiClient(base_url="http://127.0.0.1:1/api") as client:
                await client.stores.get_all()

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(scenario())

        assert str(exc_info.value) == "Failed to fetch stores"
        assert exc_info.value.status is None

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("VITE_API_BASE_URL", "https://api.thriphti.example/v1/")
        client = ThriphtiApiClient()
        assert client.base_url == "https://api.thriphti.example/v1"

    def test_default_base_url(self):
        assert ThriphtiApiClient().base_url == "http://localhost:3000/api"

    def test_timeout_maps_to_fetch_error(self):
        async def slow(request):
            await asyncio.sleep(1)
            return web.json_response(EVENTS)

        async def scenario():
            app = web.Application()
            app.router.add_get("/api/events", slow)
            async with test_utils.TestServer(app) as server:
                async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=0.1)) as session:
                    client = ThriphtiApiClient(base_url=str(server.make_url("/api")), session=session)
                    await client.events.get_all()

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(scenario())

        assert str(exc_info.value) == "Failed to fetch events"
        assert exc_info.value.status is None

    def test_owned_session_has_no_timeout(self):
        async def scenario():
            async with ThriphtiApiClient() as client:
                return client._get_session().timeout.total

        assert asyncio.run(scenario()) is None
