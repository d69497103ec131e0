"""
Configuration for cricketsync: sheet URLs, output directory and logging.

Every field can be set from the environment (case-insensitive, no prefix),
so ``MATCHES_SHEET_URL`` fills ``matches_sheet_url`` and ``DATA_DIR`` fills
``data_dir``. This matches the secrets the site build already exports.
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

URL_FIELDS = (
    "matches_sheet_url",
    "highlights_sheet_url",
    "announcements_sheet_url",
    "team_sheet_url",
    "family_sheet_url",
)


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.
    """

    # Published CSV export URLs, one per source
    matches_sheet_url: Optional[str] = Field(
        default=None, description="CSV export URL of the fixtures/results sheet"
    )
    highlights_sheet_url: Optional[str] = Field(
        default=None, description="CSV export URL of the highlights sheet"
    )
    announcements_sheet_url: Optional[str] = Field(
        default=None, description="CSV export URL of the announcements sheet"
    )
    team_sheet_url: Optional[str] = Field(
        default=None, description="CSV export URL of the team/squad sheet"
    )
    family_sheet_url: Optional[str] = Field(
        default=None, description="CSV export URL of the family photos sheet"
    )

    # Output
    data_dir: Path = Field(
        default=Path("data"), description="Directory the JSON files are written to"
    )

    # Transport
    request_timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds (None waits forever)"
    )

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
    }

    @field_validator(*URL_FIELDS, mode="before")
    @classmethod
    def blank_url_is_unset(cls, v):
        # Unset CI secrets arrive as empty strings
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("request_timeout")
    @classmethod
    def positive_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    def sheet_urls(self) -> Dict[str, Optional[str]]:
        """Return the configured URL per setting name, in source order."""
        return {name: getattr(self, name) for name in URL_FIELDS}

    def has_any_url(self) -> bool:
        """True when at least one sheet URL is set."""
        return any(self.sheet_urls().values())
