"""Scoreboard configuration loader."""

import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path

from taskboard.core.layout import LayoutSettings
from taskboard.core.parser import SnapshotFormat

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"


@dataclass
class SheetConfig:
    spreadsheet_id: str | None = None
    sheet_name: str | None = None
    api_key: str | None = None
    spreadsheet_id_env: str = "SPREADSHEET_ID"
    sheet_name_env: str = "SHEET_NAME"
    api_key_env: str = "GOOGLE_SHEETS_API_KEY"
    base_url: str = SHEETS_API_BASE
    proxy_url: str | None = None  # fetch from a running proxy instead
    timeout_s: float = 15.0

    def resolved(self) -> "SheetConfig":
        """Return a copy with credentials filled in from the environment."""
        return SheetConfig(
            spreadsheet_id=self.spreadsheet_id or os.environ.get(self.spreadsheet_id_env),
            sheet_name=self.sheet_name or os.environ.get(self.sheet_name_env),
            api_key=self.api_key or os.environ.get(self.api_key_env),
            spreadsheet_id_env=self.spreadsheet_id_env,
            sheet_name_env=self.sheet_name_env,
            api_key_env=self.api_key_env,
            base_url=self.base_url,
            proxy_url=self.proxy_url,
            timeout_s=self.timeout_s,
        )


@dataclass
class PollingConfig:
    interval_s: float = 30.0


@dataclass
class AnimationConfig:
    delay_ms: int = 1000
    duration_ms: int = 2000
    frame_ms: int = 50


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class ScoreboardConfig:
    name: str
    format: SnapshotFormat = SnapshotFormat.NAME_TASKS
    placeholder_count: int = 5
    prune_missing: bool = False
    state_file: Path = Path("output/state.json")
    sheet: SheetConfig = field(default_factory=SheetConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    layout: LayoutSettings = field(default_factory=LayoutSettings)
    server: ServerConfig = field(default_factory=ServerConfig)
    output_dir: Path = Path("output/telemetry")


def load_config(path: Path) -> ScoreboardConfig:
    """Load scoreboard config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    s = raw["scoreboard"]
    sh = raw.get("sheet", {})
    po = raw.get("polling", {})
    an = raw.get("animation", {})
    la = raw.get("layout", {})
    sv = raw.get("server", {})

    sheet = SheetConfig(
        spreadsheet_id=sh.get("spreadsheet_id"),
        sheet_name=sh.get("sheet_name"),
        api_key=sh.get("api_key"),
        spreadsheet_id_env=sh.get("spreadsheet_id_env", "SPREADSHEET_ID"),
        sheet_name_env=sh.get("sheet_name_env", "SHEET_NAME"),
        api_key_env=sh.get("api_key_env", "GOOGLE_SHEETS_API_KEY"),
        base_url=sh.get("base_url", SHEETS_API_BASE),
        proxy_url=sh.get("proxy_url"),
        timeout_s=sh.get("timeout_s", 15.0),
    )

    layout = LayoutSettings(
        single_row_max=la.get("single_row_max", 5),
        spacing=la.get("spacing", 275),
        compact_spacing=la.get("compact_spacing", 220),
        row_offset=la.get("row_offset", 420),
        margin=la.get("margin", 30),
    )

    return ScoreboardConfig(
        name=s["name"],
        format=SnapshotFormat(s.get("format", SnapshotFormat.NAME_TASKS.value)),
        placeholder_count=s.get("placeholder_count", 5),
        prune_missing=s.get("prune_missing", False),
        state_file=Path(s.get("state_file", "output/state.json")),
        sheet=sheet,
        polling=PollingConfig(interval_s=po.get("interval_s", 30.0)),
        animation=AnimationConfig(
            delay_ms=an.get("delay_ms", 1000),
            duration_ms=an.get("duration_ms", 2000),
            frame_ms=an.get("frame_ms", 50),
        ),
        layout=layout,
        server=ServerConfig(
            host=sv.get("host", "127.0.0.1"),
            port=sv.get("port", 3000),
        ),
        output_dir=Path(raw.get("output_dir", "output/telemetry")),
    )
