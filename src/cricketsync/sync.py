"""
Sequential sync of every configured sheet source.

Each configured source is fetched, converted and written before the next
one starts. The first transport or write failure stops the run; sources
after it are left untouched.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

from .converter import ParseWarning, convert
from .errors import NoSourcesConfigured, SyncFailed, TransportError, WriteError
from .fetcher import fetch_text
from .settings import Settings
from .sources import SheetSource, build_sources, select_sources

logger = logging.getLogger(__name__)

SYNCED = "synced"
SKIPPED = "skipped"
FAILED = "failed"


class SourceResult(BaseModel):
    """
    Result of syncing one source.
    """

    name: str
    label: str
    status: str
    path: Optional[Path] = None
    records: Optional[int] = None
    warnings: List[ParseWarning] = Field(default_factory=list)
    error_message: Optional[str] = None


class SyncReport(BaseModel):
    """
    Per-source results of a run, in sync order.
    """

    results: List[SourceResult] = Field(default_factory=list)

    def _with_status(self, status: str) -> List[SourceResult]:
        return [r for r in self.results if r.status == status]

    @property
    def synced(self) -> List[SourceResult]:
        return self._with_status(SYNCED)

    @property
    def skipped(self) -> List[SourceResult]:
        return self._with_status(SKIPPED)

    @property
    def failed(self) -> List[SourceResult]:
        return self._with_status(FAILED)

    @property
    def success(self) -> bool:
        return not self.failed


# listener(event, source, result); event is "start", "skipped", "synced" or "failed"
Listener = Callable[[str, SheetSource, Optional[SourceResult]], None]


class SheetSync:
    """
    Orchestrates fetch and conversion across the sheet sources.

    Args:
        settings: Explicit configuration; nothing is read from the
            environment during the run
        fetch: Callable ``(url, timeout) -> str`` used to download sheets
        only: Optional subset of source names to sync
        listener: Optional progress callback
    """

    def __init__(
        self,
        settings: Settings,
        fetch: Callable[..., str] = fetch_text,
        only: Optional[Sequence[str]] = None,
        listener: Optional[Listener] = None,
    ):
        self.settings = settings
        self.fetch = fetch
        self.only = list(only) if only else None
        self.listener = listener
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    def _notify(
        self, event: str, source: SheetSource, result: Optional[SourceResult] = None
    ) -> None:
        if self.listener is not None:
            self.listener(event, source, result)

    def sources(self) -> List[SheetSource]:
        """Sources selected for this run, in sync order."""
        return select_sources(build_sources(self.settings), self.only)

    def run(self) -> SyncReport:
        """
        Sync every configured source.

        Returns:
            SyncReport with one entry per selected source

        Raises:
            NoSourcesConfigured: If no selected source has a URL; no network
                call is made
            SyncFailed: On the first transport or write failure
        """
        sources = self.sources()
        if not any(s.configured for s in sources):
            raise NoSourcesConfigured([s.env_var for s in sources])

        report = SyncReport()
        self.logger.info(
            "Syncing %d of %d sources",
            sum(1 for s in sources if s.configured),
            len(sources),
        )

        for source in sources:
            if not source.configured:
                self.logger.warning(
                    "%s URL not provided (%s), skipping", source.label, source.env_var
                )
                skipped = SourceResult(
                    name=source.name, label=source.label, status=SKIPPED
                )
                report.results.append(skipped)
                self._notify(SKIPPED, source, skipped)
                continue

            self._notify("start", source)
            try:
                result = self.sync_source(source)
            except (TransportError, WriteError) as e:
                self.logger.error(f"Failed to sync {source.name}: {e}")
                failed = SourceResult(
                    name=source.name,
                    label=source.label,
                    status=FAILED,
                    error_message=str(e),
                )
                report.results.append(failed)
                self._notify(FAILED, source, failed)
                raise SyncFailed(source.name, report, e) from e

            report.results.append(result)
            self._notify(SYNCED, source, result)

        self.logger.info(
            "Completed: %d synced, %d skipped",
            len(report.synced),
            len(report.skipped),
        )
        return report

    def sync_source(self, source: SheetSource) -> SourceResult:
        """
        Fetch one source and write its JSON file.

        Raises:
            TransportError: If the download fails
            WriteError: If the output cannot be written
        """
        self.logger.info(f"Downloading {source.name} from {source.display_url()}")
        text = self.fetch(source.url, timeout=self.settings.request_timeout)
        result = convert(text, source.output_path)
        return SourceResult(
            name=source.name,
            label=source.label,
            status=SYNCED,
            path=source.output_path,
            records=len(result),
            warnings=result.warnings,
        )


def run_sync(
    settings: Optional[Settings] = None,
    only: Optional[Sequence[str]] = None,
    listener: Optional[Listener] = None,
) -> SyncReport:
    """Convenience function to sync all configured sources."""
    return SheetSync(settings or Settings(), only=only, listener=listener).run()
