"""SheetsClient — fetch score grids from the Google Sheets values API.

Talks to Google directly, or to a running taskboard proxy when
proxy_url is configured. Both return the same {"values": [[...]]}
payload, validated against a JSON Schema before use.
"""

from urllib.parse import quote

import jsonschema
import requests

from taskboard.config import SheetConfig

VALUES_SCHEMA = {
    "type": "object",
    "properties": {
        "range": {"type": "string"},
        "values": {
            "type": "array",
            "items": {
                "type": "array",
                "items": {"type": ["string", "number", "boolean", "null"]},
            },
        },
    },
}


class TransportError(Exception):
    """Raised on any fetch failure. Never let raw requests exceptions propagate."""

    def __init__(self, error_type: str, details: str = "", status: int | None = None):
        self.error_type = error_type  # not_configured, timeout, http_error, network_error, malformed_payload
        self.details = details
        self.status = status
        super().__init__(f"{error_type}: {details}" if details else error_type)


class SheetsClient:
    def __init__(self, sheet: SheetConfig):
        self._sheet = sheet.resolved()

    @property
    def configured(self) -> bool:
        if self._sheet.proxy_url:
            return True
        s = self._sheet
        return bool(s.spreadsheet_id and s.sheet_name and s.api_key)

    @property
    def url(self) -> str:
        s = self._sheet
        if s.proxy_url:
            return s.proxy_url
        return f"{s.base_url.rstrip('/')}/{s.spreadsheet_id}/values/{quote(s.sheet_name, safe='')}"

    def fetch_payload(self) -> dict:
        """GET the values payload and validate its shape."""
        if not self.configured:
            raise TransportError(
                "not_configured",
                "API key, spreadsheet ID, or sheet name not configured",
            )
        params = None if self._sheet.proxy_url else {"key": self._sheet.api_key}
        try:
            resp = requests.get(self.url, params=params, timeout=self._sheet.timeout_s)
        except requests.Timeout as e:
            raise TransportError("timeout", str(e)) from e
        except requests.RequestException as e:
            raise TransportError("network_error", str(e)) from e

        if not resp.ok:
            raise TransportError(
                "http_error", f"HTTP status {resp.status_code}", status=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise TransportError("malformed_payload", f"invalid JSON: {e}") from e
        try:
            jsonschema.validate(payload, VALUES_SCHEMA)
        except jsonschema.ValidationError as e:
            raise TransportError("malformed_payload", e.message) from e
        return payload

    def fetch_values(self) -> list[list[str]]:
        """Fetch the grid with every cell as a string."""
        payload = self.fetch_payload()
        return [
            ["" if cell is None else str(cell) for cell in row]
            for row in payload.get("values", [])
        ]
