"""Reverse proxy for sheet data plus a read-only scoreboard endpoint.

    GET /api/sheet-data   -> Google Sheets values payload, fetched server-side
    GET /api/scoreboard   -> last persisted scoreboard state

Keeps the API key on the server. stdlib http.server only.
"""

import json
import logging
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler

from taskboard.config import ScoreboardConfig
from taskboard.core.store import StateStore
from taskboard.transport import SheetsClient, TransportError

logger = logging.getLogger(__name__)


class ScoreboardHandler(BaseHTTPRequestHandler):
    client: SheetsClient  # set on class before serving
    store: StateStore

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self):
        path = self.path.split("?", 1)[0]
        if path == "/api/sheet-data":
            self._serve_sheet_data()
        elif path == "/api/scoreboard":
            self._send_json(200, self.store.read_raw())
        else:
            self._send_json(404, {"error": "Not found."})

    def _serve_sheet_data(self):
        try:
            payload = self.client.fetch_payload()
        except TransportError as e:
            logger.warning("Error fetching Google Sheet data: %s", e)
            if e.error_type == "not_configured":
                status = 500
                body = {"error": "API key, Spreadsheet ID, or Sheet Name not configured on the server."}
            else:
                status = e.status if e.error_type == "http_error" and e.status else 502
                body = {"error": "Failed to fetch data from Google Sheets.", "details": e.details}
            self._send_json(status, body)
            return
        self._send_json(200, payload)

    def _send_json(self, status: int, data: dict):
        body = json.dumps(data).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


def make_server(config: ScoreboardConfig) -> ThreadingHTTPServer:
    # Never proxy to ourselves
    sheet = config.sheet.resolved()
    sheet.proxy_url = None
    handler = type("BoundScoreboardHandler", (ScoreboardHandler,), {
        "client": SheetsClient(sheet),
        "store": StateStore(config.state_file, config.placeholder_count),
    })
    return ThreadingHTTPServer((config.server.host, config.server.port), handler)


def serve(config: ScoreboardConfig) -> None:
    server = make_server(config)
    host, port = server.server_address[:2]
    print(f"Server running at http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down.")
    finally:
        server.server_close()
