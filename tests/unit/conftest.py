"""Pytest configuration and shared fixtures for unit tests."""

from pathlib import Path

import pytest
import responses
from valencehelper import Valence

# =============================================================================
# Fake Brightspace instance
# =============================================================================

BASE_URL = "https://lms.example.edu"
LP = "/d2l/api/lp/1.30"

ORG_INFO = {
    "Identifier": "6606",
    "Name": "Example University",
    "TimeZone": "America/Toronto",
}

ROLES = [
    {"Identifier": "110", "DisplayName": "Student", "Code": None},
    {"Identifier": "109", "DisplayName": "Instructor", "Code": None},
]

ORG_UNIT_TYPES = [
    {
        "Id": 3,
        "Code": "Course Offering",
        "Name": "Course Offering",
        "Description": "",
        "SortOrder": 0,
        "CanDelete": False,
        "CanEdit": True,
    },
    {
        "Id": 5,
        "Code": "Semester",
        "Name": "Semester",
        "Description": "",
        "SortOrder": 1,
        "CanDelete": True,
        "CanEdit": True,
    },
    {
        "Id": 2,
        "Code": "Course Template",
        "Name": "Course Template",
        "Description": "",
        "SortOrder": 2,
        "CanDelete": False,
        "CanEdit": False,
    },
    {
        "Id": 205,
        "Code": "Department",
        "Name": "Department",
        "Description": "",
        "SortOrder": 3,
        "CanDelete": True,
        "CanEdit": True,
    },
]


class FakeSigner:
    """Signer that returns unsigned absolute URIs and remembers each call."""

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self.calls = []

    def create_authenticated_uri(self, route: str, method: str) -> str:
        self.calls.append((method, route))
        return f"{self.base_url}{route}"


def url(route: str) -> str:
    """Absolute URL of a Learning Platform route on the fake instance."""
    return f"{BASE_URL}{LP}{route}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mocked_responses():
    """Activate `responses` for the duration of a test."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def valence(mocked_responses, signer):
    """A ready session with exit-on-error disabled."""
    mocked_responses.add(responses.GET, url("/organization/info"), json=ORG_INFO)
    return Valence(signer=signer, exit_on_error=False)


@pytest.fixture
def lookup_tables(mocked_responses):
    """Register the two calls `bootstrap()` makes."""
    mocked_responses.add(responses.GET, url("/6606/roles/"), json=ROLES)
    mocked_responses.add(responses.GET, url("/outypes/"), json=ORG_UNIT_TYPES)
    return mocked_responses


@pytest.fixture
def fixtures_dir():
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"
