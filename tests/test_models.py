"""Unit tests for the wire-shape conversion of models."""

from datetime import timezone

import pytest

from thriphti.models import Event, EventCategory, Store


class TestEvent:
    """Test Event parsing."""

    def test_from_dict_parses_zulu_dates(self):
        event = Event.from_dict({
            "id": 12,
            "title": "Bishop Arts Pop-Up",
            "description": None,
            "location": "Bishop Arts",
            "date": "2024-06-01T15:30:00Z",
            "category": "pop-up",
        })

        assert event.id == "12"
        assert event.description == ""
        assert event.date.tzinfo == timezone.utc
        assert event.category is EventCategory.POP_UP
        assert event.featured is None

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            Event.from_dict({
                "id": "1",
                "title": "Bake Sale",
                "location": "Dallas",
                "date": "2024-06-01T00:00:00",
                "category": "bake-sale",
            })


class TestStore:
    """Test Store parsing."""

    def test_categories_are_deduplicated_in_order(self):
        store = Store.from_dict({
            "id": "s1",
            "name": "Thrift Town",
            "categories": ["clothing", "books", "clothing"],
        })

        assert store.categories == ["clothing", "books"]
        assert store.hours == {}
        assert store.images == []

    def test_to_dict_uses_camel_case(self, sample_stores):
        data = sample_stores[0].to_dict()

        assert data["zipCode"] == "75208"
        assert data["hours"] == {"saturday": {"open": "09:00", "close": "18:00"}}

    def test_null_text_fields_become_empty(self):
        store = Store.from_dict({
            "id": "s2",
            "name": "Second Chance Resale",
            "location": None,
            "city": None,
            "zipCode": None,
        })

        assert store.location == ""
        assert store.city == ""
        assert store.zip_code == ""


class TestEventDates:
    """Test timestamps as the backend serializes them."""

    def test_millisecond_zulu_timestamp(self):
        event = Event.from_dict({
            "id": "1",
            "title": "White Rock Flea",
            "location": None,
            "date": "2024-05-04T08:00:00.000Z",
            "category": "flea-market",
        })

        assert event.location == ""
        assert event.date.tzinfo == timezone.utc
        # Dates are re-serialized in Python's isoformat, not echoed verbatim
        assert event.to_dict()["date"] == "2024-05-04T08:00:00+00:00"
