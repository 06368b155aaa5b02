"""
Data models for Thriphti.

Defines the records exchanged with the REST backend: events (garage sales,
flea markets, pop-ups), thrift stores, and articles. Field names follow
Python conventions; to_dict()/from_dict() convert to and from the camelCase
wire shape.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from enum import Enum


class EventCategory(str, Enum):
    """Kinds of secondhand events listed on the site."""
    GARAGE_SALE = "garage-sale"
    FLEA_MARKET = "flea-market"
    POP_UP = "pop-up"
    CONSIGNMENT = "consignment"


def _parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass
class Event:
    """
    A single secondhand event (garage sale, flea market, pop-up, consignment).

    Created by backend ingestion; read-only on the client side.
    """
    id: str
    title: str
    description: str
    location: str
    date: datetime
    category: EventCategory

    image_url: Optional[str] = None
    price: Optional[str] = None  # Display string, e.g. "Free" or "$5 entry"
    featured: Optional[bool] = None

    def to_dict(self) -> dict:
        """Convert to the wire shape."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "imageUrl": self.image_url,
            "price": self.price,
            "featured": self.featured,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        """Create from a backend payload."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            location=data.get("location") or "",
            date=_parse_datetime(data["date"]),
            category=EventCategory(data["category"]),
            image_url=data.get("imageUrl"),
            price=data.get("price"),
            featured=data.get("featured"),
        )


@dataclass
class StoreHours:
    """Opening hours for one day, e.g. open="09:00", close="18:00"."""
    open: str
    close: str

    def to_dict(self) -> dict:
        return {"open": self.open, "close": self.close}

    @classmethod
    def from_dict(cls, data: dict) -> "StoreHours":
        return cls(open=data["open"], close=data["close"])


@dataclass
class Store:
    """
    A thrift, vintage or consignment store.

    hours is keyed by day name ("monday", "tuesday", ...). categories keeps
    its first-seen order but holds each category once.
    """
    id: str
    name: str
    description: str
    location: str

    # Address
    address: str
    city: str
    state: str
    zip_code: str

    phone: Optional[str] = None
    website: Optional[str] = None
    hours: dict[str, StoreHours] = field(default_factory=dict)
    categories: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    featured: Optional[bool] = None

    def to_dict(self) -> dict:
        """Convert to the wire shape."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "phone": self.phone,
            "website": self.website,
            "hours": {day: hours.to_dict() for day, hours in self.hours.items()},
            "categories": list(self.categories),
            "images": list(self.images),
            "featured": self.featured,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Store":
        """Create from a backend payload."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            location=data.get("location") or "",
            address=data.get("address") or "",
            city=data.get("city") or "",
            state=data.get("state") or "",
            zip_code=data.get("zipCode") or "",
            phone=data.get("phone"),
            website=data.get("website"),
            hours={
                day: StoreHours.from_dict(hours)
                for day, hours in (data.get("hours") or {}).items()
            },
            categories=list(dict.fromkeys(data.get("categories") or [])),
            images=list(data.get("images") or []),
            featured=data.get("featured"),
        )


@dataclass
class Article:
    """An editorial article (thrifting guides, neighborhood roundups)."""
    id: str
    title: str
    slug: str
    excerpt: str
    body: str
    image: str
    author: str
    published_at: datetime
    category: str
    tags: list[str] = field(default_factory=list)
    city: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "excerpt": self.excerpt,
            "body": self.body,
            "image": self.image,
            "author": self.author,
            "publishedAt": self.published_at.isoformat(),
            "category": self.category,
            "tags": list(self.tags),
            "city": self.city,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            slug=data["slug"],
            excerpt=data.get("excerpt") or "",
            body=data.get("body") or "",
            image=data.get("image") or "",
            author=data.get("author") or "",
            published_at=_parse_datetime(data["publishedAt"]),
            category=data.get("category") or "",
            tags=list(data.get("tags") or []),
            city=data.get("city") or "",
        )
