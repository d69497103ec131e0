"""
Fixtures and test configuration for the cricketsync test suite.
"""

import tempfile
from pathlib import Path
from typing import Dict

import pytest

from cricketsync.settings import Settings

ENV_VARS = (
    "MATCHES_SHEET_URL",
    "HIGHLIGHTS_SHEET_URL",
    "ANNOUNCEMENTS_SHEET_URL",
    "TEAM_SHEET_URL",
    "FAMILY_SHEET_URL",
    "DATA_DIR",
    "LOG_LEVEL",
    "REQUEST_TIMEOUT",
)

SHEET_URLS = {
    "matches_sheet_url": "https://docs.google.com/spreadsheets/d/e/matches/pub?output=csv",
    "highlights_sheet_url": "https://docs.google.com/spreadsheets/d/e/highlights/pub?output=csv",
    "announcements_sheet_url": "https://docs.google.com/spreadsheets/d/e/announcements/pub?output=csv",
    "team_sheet_url": "https://docs.google.com/spreadsheets/d/e/team/pub?output=csv",
    "family_sheet_url": "https://docs.google.com/spreadsheets/d/e/family/pub?output=csv",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's sheet URLs out of the tests."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def data_dir(temp_dir):
    return temp_dir / "data"


@pytest.fixture
def sheet_urls() -> Dict[str, str]:
    return dict(SHEET_URLS)


@pytest.fixture
def all_settings(data_dir, sheet_urls):
    """Settings with every source configured."""
    return Settings(data_dir=data_dir, **sheet_urls)


@pytest.fixture
def matches_only_settings(data_dir, sheet_urls):
    """Settings with only the matches sheet configured."""
    return Settings(data_dir=data_dir, matches_sheet_url=sheet_urls["matches_sheet_url"])


@pytest.fixture
def sample_csv_content():
    """Sample fixtures sheet as exported by Google Sheets."""
    return (
        "Date, Opponent ,Venue,Runs,Result\n"
        "2024-05-04,Little Snoring CC , Home,142,Won\n"
        "2024-05-11, Much Wenlock,Away ,98.5,Lost\n"
        ",,,,\n"
        "2024-05-18,Upper Slaughter,Home,,Abandoned\n"
    )


@pytest.fixture
def fake_fetch(sample_csv_content):
    """
    Fetch stand-in returning the sample CSV for every URL and recording calls.
    """

    class FakeFetch:
        def __init__(self):
            self.calls = []
            self.responses = {}
            self.errors = {}

        def __call__(self, url, timeout=None):
            self.calls.append((url, timeout))
            if url in self.errors:
                raise self.errors[url]
            return self.responses.get(url, sample_csv_content)

    return FakeFetch()
