"""UpdateOrchestrator — runs gated refresh cycles.

One cycle: take the gate, fetch a snapshot off the event loop, run the
pipeline, persist, let the presenter animate, settle previous totals,
persist again, release the gate. Fetch failures keep the previous state
and surface as a one-shot notice.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import time
import uuid
from dataclasses import dataclass
from typing import Callable

from taskboard.config import ScoreboardConfig
from taskboard.core.gate import ChangeGate
from taskboard.core.pipeline import CycleResult, CycleStatus, arrange, run_pipeline
from taskboard.core.state import ScoreboardState
from taskboard.core.store import StateStore
from taskboard.core.telemetry import CycleEntry, RefreshLogger
from taskboard.presenter import Notice, Presenter
from taskboard.transport import TransportError

logger = logging.getLogger(__name__)

NO_NEW_SCORES = "No new scores detected. Check your Google Sheet for updates."

# kill -USR1 <pid> runs a manual cycle, like pressing play
TRIGGER_SIGNAL = getattr(signal, "SIGUSR1", None)


@dataclass
class FetchResult:
    grid: list[list[str]] | None = None
    error: str | None = None
    elapsed_ms: float = 0.0


class UpdateOrchestrator:
    """Owns the ScoreboardState and drives it from snapshot fetches."""

    def __init__(
        self,
        config: ScoreboardConfig,
        fetch_snapshot: Callable[[], list[list[str]]],
        presenter: Presenter,
        store: StateStore | None = None,
        telemetry: RefreshLogger | None = None,
    ):
        self.config = config
        self._fetch_snapshot = fetch_snapshot
        self.presenter = presenter
        self.store = store
        self.telemetry = telemetry
        self.gate = ChangeGate()
        self.state = ScoreboardState()
        self._cycle = 0
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_config(
        cls,
        config: ScoreboardConfig,
        fetch_snapshot: Callable[[], list[list[str]]],
        presenter: Presenter,
    ) -> UpdateOrchestrator:
        session_id = f"session-{uuid.uuid4().hex[:8]}"
        return cls(
            config,
            fetch_snapshot,
            presenter,
            store=StateStore(config.state_file, config.placeholder_count),
            telemetry=RefreshLogger(config.output_dir, session_id),
        )

    # ── Fetch ─────────────────────────────────────────────────────

    async def _fetch(self) -> FetchResult:
        start = time.monotonic()
        self.presenter.loading(True)
        try:
            grid = await asyncio.to_thread(self._fetch_snapshot)
        except TransportError as e:
            logger.warning("Snapshot fetch failed: %s", e)
            return FetchResult(error=str(e), elapsed_ms=(time.monotonic() - start) * 1000)
        finally:
            self.presenter.loading(False)
        return FetchResult(grid=grid, elapsed_ms=(time.monotonic() - start) * 1000)

    # ── Cycles ────────────────────────────────────────────────────

    async def startup(self) -> CycleResult:
        """Restore saved state, else seed from one fetch, else placeholders."""
        saved = self.store.load() if self.store else None
        if saved is not None:
            self.state = saved
            logger.info("Restored %d contestants from saved state", len(saved.roster))
            return arrange(self.state, self.config.layout)

        fetched = await self._fetch()
        if fetched.grid is not None:
            result = run_pipeline(
                self.state, fetched.grid, self.config.format,
                self.config.layout, self.config.prune_missing,
            )
            if result.status is not CycleStatus.EMPTY:
                self.state.settle()
                self._save()
                return result

        self.state = ScoreboardState.default(self.config.placeholder_count)
        logger.info("No data available; using %d placeholders", self.config.placeholder_count)
        self._save()
        return arrange(self.state, self.config.layout)

    async def refresh(self, quiet: bool = False) -> CycleResult:
        """Run one cycle. Dropped with status BUSY if one is in flight.

        quiet suppresses the "no new scores" notice (poll ticks).
        """
        if not self.gate.try_acquire():
            return CycleResult(status=CycleStatus.BUSY)
        try:
            return await self._run_cycle(quiet)
        finally:
            self.gate.release()

    async def _run_cycle(self, quiet: bool) -> CycleResult:
        self._cycle += 1
        fetched = await self._fetch()

        if fetched.grid is None:
            self.presenter.notify(
                Notice(f"Error fetching spreadsheet data: {fetched.error}", level="error")
            )
            result = CycleResult(status=CycleStatus.TRANSPORT_FAILURE, error=fetched.error)
            self._log_cycle(result, fetched)
            return result

        result = run_pipeline(
            self.state, fetched.grid, self.config.format,
            self.config.layout, self.config.prune_missing,
        )
        self._log_cycle(result, fetched)

        if not result.changed:
            logger.info("Cycle %d: %s", self._cycle, result.status.value)
            if not quiet:
                self.presenter.notify(Notice(NO_NEW_SCORES))
            if result.status is not CycleStatus.EMPTY:
                self._save()
            return result

        logger.info(
            "Cycle %d: updated (%d added, %d removed, %d tasks complete)",
            self._cycle, len(result.added), len(result.removed), len(result.completed_tasks),
        )
        self._save()
        await self.presenter.present(result)
        self.state.settle()
        self._save()
        return result

    def trigger(self) -> asyncio.Task | None:
        """Schedule a manual cycle without waiting. None if the gate is held."""
        if self.gate.busy:
            logger.debug("Trigger skipped; refresh in flight")
            return None
        return self._spawn(self.refresh())

    def listen_for_trigger(self, sig: int | None = TRIGGER_SIGNAL) -> bool:
        """Call trigger() whenever sig arrives. Must run inside the event loop."""
        if sig is None:
            return False
        try:
            asyncio.get_running_loop().add_signal_handler(sig, self.trigger)
        except (NotImplementedError, RuntimeError) as e:
            logger.warning("Manual trigger signal unavailable: %s", e)
            return False
        return True

    async def run(self, cycles: int | None = None) -> None:
        """Startup, one refresh, then poll until cycles ticks have elapsed.

        A tick that finds the gate held is skipped, not rescheduled.
        """
        await self.startup()
        await self.refresh(quiet=True)
        ticks = 0
        while cycles is None or ticks < cycles:
            await asyncio.sleep(self.config.polling.interval_s)
            ticks += 1
            if self.gate.busy:
                logger.debug("Poll tick %d skipped; refresh in flight", ticks)
                continue
            self._spawn(self.refresh(quiet=True))
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_cycle_done)
        return task

    def _on_cycle_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Refresh cycle failed: %s", exc, exc_info=exc)

    # ── Helpers ───────────────────────────────────────────────────

    def _save(self) -> None:
        if self.store:
            self.store.save(self.state)

    def _log_cycle(self, result: CycleResult, fetched: FetchResult) -> None:
        if not self.telemetry:
            return
        self.telemetry.log_cycle(CycleEntry(
            cycle=self._cycle,
            status=result.status.value,
            changed=result.changed,
            completed_tasks=list(result.completed_tasks),
            standings=[(con.name, con.current_total) for con in result.roster],
            added=list(result.added),
            removed=list(result.removed),
            error=result.error,
            fetch_ms=fetched.elapsed_ms,
        ))
