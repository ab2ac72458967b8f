"""Live spreadsheet-backed scoreboard."""

__version__ = "0.1.0"
