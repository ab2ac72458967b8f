"""CLI entry point: python -m taskboard [watch|serve] <config.yaml>"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from taskboard.config import load_config


def _watch(config, once: bool) -> None:
    """Run the live terminal scoreboard."""
    from taskboard.orchestrator import UpdateOrchestrator
    from taskboard.presenter import RichPresenter
    from taskboard.transport import SheetsClient

    client = SheetsClient(config.sheet)
    presenter = RichPresenter(config.name, config.animation)
    orchestrator = UpdateOrchestrator.from_config(config, client.fetch_values, presenter)

    async def _main():
        orchestrator.listen_for_trigger()
        if once:
            await orchestrator.startup()
            result = await orchestrator.refresh()
            print(f"Cycle: {result.status.value}")
        else:
            await orchestrator.run()

    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        print("\nStopped.")

    print(f"State:     {orchestrator.store.path}")
    print(f"Telemetry: {orchestrator.telemetry.file_path}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Live spreadsheet-backed scoreboard",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["watch", "serve"],
        default="watch",
        help="watch: terminal scoreboard (default, SIGUSR1 forces a refresh); serve: sheet-data proxy",
    )
    parser.add_argument(
        "config",
        type=Path,
        help="Path to scoreboard YAML config file",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=False,
        help="Run a single refresh cycle and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    load_dotenv()

    if not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    config = load_config(args.config)
    print(f"Scoreboard: {config.name} (format={config.format.value})")

    if args.command == "serve":
        from taskboard.server import serve
        serve(config)
    else:
        _watch(config, once=args.once)


if __name__ == "__main__":
    main()
