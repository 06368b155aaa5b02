"""
RSS feed endpoints.

- /test-rss-feed: quick check. One fetch, then a regex scan for the feed
  title, description and item count.
- /validate-rss-feed: full check. Parses the feed as XML, extracts up to
  10 items, and caches the result in Supabase for an hour.

Both report problems with the feed itself as {isValid: false, error} in a
normal response, so callers must look at the payload, not the status code.
"""

import re
import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup
from flask import Blueprint, jsonify

from ..config import get_app_config
from ..db import Database, get_db, is_configured
from .payload import json_body

logger = logging.getLogger(__name__)

bp = Blueprint("rss", __name__)

FEED_ACCEPT = "application/rss+xml, application/xml, text/xml"
MAX_PREVIEW_ITEMS = 10

TITLE_PATTERN = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)
DESCRIPTION_PATTERN = re.compile(r"<description[^>]*>([^<]*)</description>", re.IGNORECASE)
ITEM_PATTERN = re.compile(r"<item(?:\s[^>]*)?>", re.IGNORECASE)
ENTRY_PATTERN = re.compile(r"<entry(?:\s[^>]*)?>", re.IGNORECASE)


def _fetch_feed(url: str, accept: str = FEED_ACCEPT) -> requests.Response:
    config = get_app_config()
    return requests.get(
        url,
        headers={"User-Agent": config.feed_user_agent, "Accept": accept},
        timeout=config.feed_timeout,
    )


# =============================================================================
# QUICK TEST (regex scan)
# =============================================================================

def scan_feed(feed_text: str) -> dict:
    """
    Pull basic feed information out of raw text without parsing the XML.

    Returns:
        {isValid, title, description, itemCount} or {isValid: False, error}
    """
    if "<rss" not in feed_text and "<feed" not in feed_text:
        return {"isValid": False, "error": "Not a valid RSS or Atom feed"}

    title_match = TITLE_PATTERN.search(feed_text)
    description_match = DESCRIPTION_PATTERN.search(feed_text)

    # RSS items first; only count Atom entries when there are none
    item_count = len(ITEM_PATTERN.findall(feed_text)) or len(ENTRY_PATTERN.findall(feed_text))

    return {
        "isValid": True,
        "title": (title_match.group(1).strip() if title_match else "") or "Unknown Feed",
        "description": description_match.group(1).strip() if description_match else "",
        "itemCount": item_count,
    }


@bp.route("/test-rss-feed", methods=["POST"])
def test_rss_feed():
    """Fetch a feed once and scan it."""
    url = json_body().get("url")
    if not url:
        return jsonify({"isValid": False, "error": "URL is required"}), 400

    logger.info(f"Testing RSS feed: {url}")

    try:
        response = _fetch_feed(url)
    except requests.RequestException as e:
        logger.warning(f"RSS feed fetch failed for {url}: {e}")
        return jsonify({"isValid": False, "error": f"Network error: {e}"})

    if not response.ok:
        return jsonify({
            "isValid": False,
            "error": f"HTTP {response.status_code}: {response.reason}",
        })

    result = scan_feed(response.text)
    logger.info(f"RSS feed test finished for {url}: {result}")
    return jsonify(result)


# =============================================================================
# FULL VALIDATION (XML parse + cache)
# =============================================================================

def _text(tag) -> str:
    return tag.get_text(strip=True) if tag is not None else ""


def _atom_entry(entry) -> dict:
    link = entry.find("link")
    category = entry.find("category")
    item = {
        "title": _text(entry.find("title")) or "Untitled",
        "description": _text(entry.find("summary")) or _text(entry.find("content")),
        "link": link.get("href", "") if link is not None else "",
        "pubDate": _text(entry.find("published")) or _text(entry.find("updated")),
    }
    if category is not None and category.get("term"):
        item["category"] = category["term"]
    return item


def _rss_item(entry) -> dict:
    item = {
        "title": _text(entry.find("title")) or "Untitled",
        "description": _text(entry.find("description")),
        "link": _text(entry.find("link")),
        "pubDate": _text(entry.find("pubDate")),
    }
    category = _text(entry.find("category"))
    if category:
        item["category"] = category
    return item


def parse_feed(feed_text: str) -> dict:
    """
    Parse an RSS or Atom document.

    Returns:
        {isValid: True, title, description, items, itemCount}

    Raises:
        ValueError: If the document is neither RSS nor Atom
    """
    soup = BeautifulSoup(feed_text, "xml")
    feed = soup.find("feed")
    rss = soup.find("rss")
    if feed is None and rss is None:
        raise ValueError("Not a valid RSS or Atom feed")

    if feed is not None:
        title = _text(feed.find("title", recursive=False))
        description = _text(feed.find("subtitle", recursive=False))
        items = [_atom_entry(entry) for entry in feed.find_all("entry")[:MAX_PREVIEW_ITEMS]]
    else:
        channel = rss.find("channel")
        title = _text(channel.find("title", recursive=False)) if channel else ""
        description = _text(channel.find("description", recursive=False)) if channel else ""
        items = [_rss_item(entry) for entry in rss.find_all("item")[:MAX_PREVIEW_ITEMS]]

    return {
        "isValid": True,
        "title": title or "Untitled Feed",
        "description": description,
        "items": items,
        "itemCount": len(items),
    }


def validate_feed_url(url: str) -> dict:
    """
    Fetch and parse a feed URL.

    Every failure is reported in the result, never raised.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return {
            "isValid": False,
            "error": "Invalid URL format. Please provide a valid HTTP or HTTPS URL.",
        }

    try:
        response = _fetch_feed(url, accept=f"{FEED_ACCEPT}, */*")
    except requests.Timeout:
        return {
            "isValid": False,
            "error": "Request timed out. The RSS feed took too long to respond.",
        }
    except requests.RequestException as e:
        return {
            "isValid": False,
            "error": f"Network error: Unable to reach the RSS feed. {e}",
        }

    if not response.ok:
        return {
            "isValid": False,
            "error": f"HTTP {response.status_code}: {response.reason}. The RSS feed URL returned an error.",
        }

    try:
        result = parse_feed(response.text)
    except ValueError as e:
        return {
            "isValid": False,
            "error": f"Invalid RSS feed format: {e}. Please ensure the URL points to a valid RSS or Atom feed.",
        }

    logger.info(f"Validated RSS feed: {result['title']} ({result['itemCount']} items)")
    return result


def _validation_cache() -> Optional[Database]:
    if not is_configured():
        logger.debug("Supabase not configured, skipping validation cache")
        return None
    return get_db()


@bp.route("/validate-rss-feed", methods=["POST"])
def validate_rss_feed():
    """Validate a feed, serving a cached result when one is fresh."""
    url = json_body().get("url")
    if not url:
        return jsonify({"error": "URL is required"}), 400

    logger.info(f"Validating RSS feed: {url}")
    cache = _validation_cache()
    max_age = timedelta(seconds=get_app_config().validation_cache_seconds)

    if cache is not None:
        try:
            cached = cache.get_cached_validation(url, max_age)
        except Exception as e:
            logger.warning(f"Validation cache lookup failed for {url}: {e}")
            cached = None
        if cached is not None:
            return jsonify(cached)

    result = validate_feed_url(url)

    if cache is not None:
        try:
            cache.cache_validation(url, result)
        except Exception as e:
            logger.warning(f"Failed to cache validation for {url}: {e}")

    return jsonify(result)
