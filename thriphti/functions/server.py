"""
Utility endpoint server for Thriphti.

A small Flask app that hosts the stateless admin endpoints:
1. API key status, connection tests and update acknowledgements
2. RSS feed testing and validation
3. A health check

Every response allows any origin, and every OPTIONS preflight gets a 200.
"""

import logging
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..db import get_db, is_configured
from . import api_keys, rss

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def create_app() -> Flask:
    """Build the Flask app with every utility endpoint registered."""
    app = Flask(__name__)
    app.register_blueprint(api_keys.bp)
    app.register_blueprint(rss.bp)

    @app.before_request
    def handle_preflight():
        if request.method == "OPTIONS":
            return "ok", 200
        return None

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.exception(f"Unhandled error on {request.path}: {error}")
        return jsonify({"error": str(error)}), 500

    @app.route("/health")
    def health_check():
        """Health check endpoint."""
        database = get_db().check_connection() if is_configured() else None
        return {"status": "ok", "database": database}

    return app


app = create_app()


def run_server(host: str = "0.0.0.0", port: int = 5000, debug: bool = False):
    """Run the Flask server."""
    app.run(host=host, port=port, debug=debug)


def main():
    """CLI entry point for the utility endpoint server."""
    import argparse

    parser = argparse.ArgumentParser(description="Thriphti utility endpoint server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=5000, help="Port to bind to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logger.info(f"Starting utility endpoint server on {args.host}:{args.port}")
    run_server(args.host, args.port, args.debug)


if __name__ == "__main__":
    main()
