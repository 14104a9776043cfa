"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json
import os

SERVICE_NAME = "karasu-listings"


def health_payload() -> dict:
    """Liveness plus whether the listing data source is configured."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "listings_source_configured": bool(
            os.environ.get("SUPABASE_URL") and os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        ),
    }


class handler(BaseHTTPRequestHandler):
    """Vercel serverless handler; GET and POST both answer."""

    def do_GET(self):
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(health_payload()).encode('utf-8'))

    def do_POST(self):
        self.do_GET()
