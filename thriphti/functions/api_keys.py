"""
Third-party API key endpoints used by the admin settings screen.

Keys live in the deployment environment (OPENAI_API_KEY, FIRECRAWL_API_KEY).
These endpoints only report on them or ping the provider; nothing here
stores a key.
"""

import logging

import requests
from flask import Blueprint, jsonify

from ..config import get_keys_config
from .payload import json_body

logger = logging.getLogger(__name__)

bp = Blueprint("api_keys", __name__)

OPENAI_MODELS_URL = "https://api.openai.com/v1/models"
FIRECRAWL_SCRAPE_URL = "https://api.firecrawl.dev/v0/scrape"
PROBE_TIMEOUT = 30


class ApiConnectionError(Exception):
    """A provider could not be reached with the configured key."""


def probe_api(api_type: str) -> None:
    """
    Make one authenticated request to a provider.

    Args:
        api_type: "openai" or "firecrawl"

    Raises:
        ApiConnectionError: Unknown api_type, missing key, or non-2xx answer
        requests.RequestException: The provider was unreachable
    """
    keys = get_keys_config()

    if api_type == "openai":
        if not keys.openai_api_key:
            raise ApiConnectionError("OpenAI API key not configured")
        response = requests.get(
            OPENAI_MODELS_URL,
            headers={"Authorization": f"Bearer {keys.openai_api_key}"},
            timeout=PROBE_TIMEOUT,
        )
        if not response.ok:
            raise ApiConnectionError(f"OpenAI API error: {response.status_code}")

    elif api_type == "firecrawl":
        if not keys.firecrawl_api_key:
            raise ApiConnectionError("Firecrawl API key not configured")
        response = requests.post(
            FIRECRAWL_SCRAPE_URL,
            headers={"Authorization": f"Bearer {keys.firecrawl_api_key}"},
            json={"url": "https://example.com"},
            timeout=PROBE_TIMEOUT,
        )
        if not response.ok:
            raise ApiConnectionError(f"Firecrawl API error: {response.status_code}")

    else:
        raise ApiConnectionError("Invalid API type")


@bp.route("/check-api-status", methods=["GET", "POST"])
def check_api_status():
    """Report which keys are configured. Nothing is tested here."""
    keys = get_keys_config()
    return jsonify({
        "openai": {
            "configured": bool(keys.openai_api_key),
            "tested": False,
            "lastTested": None,
        },
        "firecrawl": {
            "configured": bool(keys.firecrawl_api_key),
            "tested": False,
            "lastTested": None,
        },
    })


@bp.route("/test-api-connection", methods=["POST"])
def test_api_connection():
    api_type = json_body().get("apiType")

    try:
        probe_api(api_type)
    except (ApiConnectionError, requests.RequestException) as e:
        logger.error(f"API connection test failed for {api_type}: {e}")
        return jsonify({"success": False, "error": str(e)}), 500

    logger.info(f"API connection test passed for {api_type}")
    return jsonify({"success": True})


@bp.route("/update-api-key", methods=["POST"])
def update_api_key():
    """
    Acknowledge a key update request.

    Keys are managed as deployment secrets, so the response tells the admin
    where to set it instead of saving anything.
    """
    api_type = json_body().get("apiType")
    if not api_type:
        return jsonify({"success": False, "error": "apiType is required"}), 400

    logger.info(f"API key update requested for {api_type}")
    return jsonify({
        "success": True,
        "message": f"Please update the {api_type.upper()}_API_KEY in Supabase Edge Function Secrets",
    })
