"""Request body helpers shared by the endpoint blueprints."""

from flask import request


def json_body() -> dict:
    """The JSON object sent with the request, or {} for anything else."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
