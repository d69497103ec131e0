"""
The fixed set of sheet sources synced into the site's data directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import urlsplit

from pydantic import BaseModel, Field

from .settings import Settings

# (name, label, settings field) in sync order
SOURCE_TABLE = (
    ("matches", "Matches", "matches_sheet_url"),
    ("highlights", "Highlights", "highlights_sheet_url"),
    ("announcements", "Announcements", "announcements_sheet_url"),
    ("team", "Team", "team_sheet_url"),
    ("family", "Family Photos", "family_sheet_url"),
)


class SheetSource(BaseModel):
    """
    One published spreadsheet and the JSON file it is synced to.
    """

    name: str = Field(..., description="Short identifier, also the output file stem")
    label: str = Field(..., description="Human-readable name used in progress output")
    setting: str = Field(..., description="Settings field holding the URL")
    url: Optional[str] = Field(None, description="CSV export URL, None when unset")
    output_path: Path = Field(..., description="JSON file written for this source")

    model_config = {"frozen": True}

    @property
    def env_var(self) -> str:
        return self.setting.upper()

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def display_url(self) -> str:
        """Scheme and host only; sheet export URLs are treated as secrets."""
        if not self.url:
            return "-"
        parts = urlsplit(self.url)
        if not parts.scheme or not parts.netloc:
            return "<invalid url>"
        return f"{parts.scheme}://{parts.netloc}/..."


def source_names() -> List[str]:
    """List the names of all known sources, in sync order."""
    return [name for name, _, _ in SOURCE_TABLE]


def build_sources(settings: Settings) -> List[SheetSource]:
    """
    Build the source descriptors from the settings object.

    Args:
        settings: Settings holding the URLs and the output directory

    Returns:
        All five sources in sync order, configured or not
    """
    urls = settings.sheet_urls()
    return [
        SheetSource(
            name=name,
            label=label,
            setting=setting,
            url=urls[setting],
            output_path=settings.data_dir / f"{name}.json",
        )
        for name, label, setting in SOURCE_TABLE
    ]


def select_sources(
    sources: Sequence[SheetSource], only: Optional[Sequence[str]] = None
) -> List[SheetSource]:
    """
    Restrict sources to the given names, keeping sync order.

    Raises:
        KeyError: If a requested name is not a known source
    """
    if not only:
        return list(sources)
    by_name: Dict[str, SheetSource] = {s.name: s for s in sources}
    unknown = [n for n in only if n not in by_name]
    if unknown:
        available = ", ".join(by_name)
        raise KeyError(
            f"Unknown source(s) {', '.join(unknown)}. Available: {available}"
        )
    wanted = set(only)
    return [s for s in sources if s.name in wanted]
