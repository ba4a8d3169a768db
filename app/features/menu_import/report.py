"""Import notices: what was imported, what was skipped and why.

The report only observes. Nothing in the pipeline branches on its contents.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Literal

from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportNotice:
    """One OK or SKIP line for a record."""

    status: Literal["ok", "skip"]
    model: str
    message: str


@dataclass
class ImportReport:
    """Accumulates notices and per-model counts for one import call."""

    notices: list[ImportNotice] = field(default_factory=list)
    imported: Counter[str] = field(default_factory=Counter)
    skipped: Counter[str] = field(default_factory=Counter)
    links_created: int = 0

    def ok(self, model: str, details: str) -> None:
        self.notices.append(ImportNotice("ok", model, details))
        self.imported[model] += 1
        logger.info("menu_import.record_imported", model=model, details=details)

    def skip(self, model: str, reason: str) -> None:
        self.notices.append(ImportNotice("skip", model, reason))
        self.skipped[model] += 1
        logger.info("menu_import.record_skipped", model=model, reason=reason)

    def linked(self, created: bool) -> None:
        if created:
            self.links_created += 1

    def reset(self) -> None:
        """Forget everything recorded so far, after the writes were rolled back."""
        self.notices.clear()
        self.imported.clear()
        self.skipped.clear()
        self.links_created = 0

    @property
    def skipped_count(self) -> int:
        return sum(self.skipped.values())

    def summary(self) -> dict[str, int]:
        """Flat counters suitable for structured log fields."""
        return {
            "restaurants": self.imported["Restaurant"],
            "menus": self.imported["Menu"],
            "menu_items": self.imported["MenuItem"],
            "links_created": self.links_created,
            "skipped": self.skipped_count,
        }
