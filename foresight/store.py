"""Run Store - persisted documents and the current published result.

Two pieces:
- RunStore writes each rendered document to its own file. File names are
  derived from a UTC timestamp that strictly increases within the process,
  so names sort chronologically and never collide.
- ResultSlot holds the single current RunResult. It is replaced whole on
  publish; readers see either the previous sealed run or the new one.
"""
import logging
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from foresight.pipeline.types import RunResult

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RunStore:
    """
    File-system store for rendered run documents.

    Files land at ``<directory>/<prefix>_<timestamp>.md`` where timestamp is
    an ISO-8601 UTC time with ':' replaced by '-'.
    """

    def __init__(
        self,
        directory: Path,
        prefix: str = "ai_positive_scenarios",
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.directory = Path(directory)
        self.prefix = prefix
        self._clock = clock
        self._lock = threading.Lock()
        self._last_stamp: Optional[datetime] = None

    @classmethod
    def from_settings(cls, settings) -> "RunStore":
        return cls(directory=Path(settings.OUTPUT_DIR), prefix=settings.OUTPUT_PREFIX)

    def _next_stamp(self) -> datetime:
        with self._lock:
            stamp = self._clock()
            if self._last_stamp is not None and stamp <= self._last_stamp:
                stamp = self._last_stamp + timedelta(microseconds=1)
            self._last_stamp = stamp
            return stamp

    def filename_for(self, stamp: datetime) -> str:
        timestamp = stamp.strftime("%Y-%m-%dT%H-%M-%S.%fZ")
        return f"{self.prefix}_{timestamp}.md"

    def persist(self, document: str) -> Path:
        """Write a document to a new file and return its path."""
        self.directory.mkdir(parents=True, exist_ok=True)

        path = self.directory / self.filename_for(self._next_stamp())
        with open(path, "w", encoding="utf-8") as f:
            f.write(document)

        logger.info(f"File '{path.name}' saved to '{self.directory}'")
        return path


class ResultSlot:
    """Single-slot holder for the latest sealed RunResult."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current: Optional["RunResult"] = None

    def publish(self, run: "RunResult") -> None:
        with self._lock:
            self._current = run
        logger.info(f"Published run {run.run_id} ({len(run.scenarios)} scenarios)")

    def current(self) -> Optional["RunResult"]:
        with self._lock:
            return self._current
