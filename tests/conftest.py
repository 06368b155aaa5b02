"""Shared fixtures for Thriphti tests."""

from datetime import datetime, timezone

import pytest

from thriphti import config, db
from thriphti.models import Event, EventCategory, Store, StoreHours

ENV_VARS = [
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "OPENAI_API_KEY",
    "FIRECRAWL_API_KEY",
    "THRIPHTI_API_BASE_URL",
    "VITE_API_BASE_URL",
    "THRIPHTI_DEFAULT_CITY",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test against an empty environment and fresh config caches."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.reset_config()
    monkeypatch.setattr(db, "_db", None)
    yield
    config.reset_config()


@pytest.fixture
def sample_events():
    return [
        Event(
            id="e1",
            title="Lakewood Neighborhood Garage Sale",
            description="Twenty houses, one Saturday.",
            location="Lakewood, Dallas",
            date=datetime(2024, 5, 4, 8, 0, tzinfo=timezone.utc),
            category=EventCategory.GARAGE_SALE,
            price="Free",
            featured=True,
        ),
        Event(
            id="e2",
            title="Traders Village Flea Market",
            description="Weekend flea market.",
            location="Grand Prairie",
            date=datetime(2024, 5, 5, 9, 0, tzinfo=timezone.utc),
            category=EventCategory.FLEA_MARKET,
        ),
        Event(
            id="e3",
            title="Deep Ellum Vintage Pop-Up",
            description="",
            location="Deep Ellum, Dallas",
            date=datetime(2024, 5, 11, 12, 0, tzinfo=timezone.utc),
            category=EventCategory.POP_UP,
            price="$5",
        ),
    ]


@pytest.fixture
def sample_stores():
    return [
        Store(
            id="s1",
            name="Dallas Thrift Collective",
            description="Furniture and housewares.",
            location="Oak Cliff",
            address="123 W Davis St",
            city="Dallas",
            state="TX",
            zip_code="75208",
            hours={"saturday": StoreHours(open="09:00", close="18:00")},
            categories=["furniture", "housewares"],
            images=["https://img.example.com/s1-a.jpg"],
        ),
        Store(
            id="s2",
            name="South Congress Resale",
            description="Clothing consignment.",
            location="SoCo",
            address="1500 S Congress Ave",
            city="Austin",
            state="TX",
            zip_code="78704",
            categories=["clothing"],
            featured=True,
        ),
    ]
