"""Test configuration for the inventory test suite."""

import json
import os
from typing import List, Sequence

import pytest

# Keep developer environment overrides out of the default settings instance.
for _key in list(os.environ):
    if _key.upper().startswith("BOLT_INVENTORY_"):
        del os.environ[_key]

from bolt_inventory.core.config import Settings  # noqa: E402
from bolt_inventory.services.command_runner import CommandResult  # noqa: E402


class FakeRunner:
    """Stand-in for ``run_command`` recording every invocation."""

    def __init__(self, stdout: str = "", returncode: int = 0, stderr: str = ""):
        self.result = CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)
        self.calls: List[List[str]] = []

    def __call__(self, argv: Sequence[str], timeout: float) -> CommandResult:
        self.calls.append(list(argv))
        return self.result


@pytest.fixture
def test_settings():
    """Settings built from defaults only."""
    return Settings(_env_file=None)


@pytest.fixture
def fake_runner():
    """Factory producing a FakeRunner with canned output."""

    def _factory(stdout: str = "", returncode: int = 0, stderr: str = "") -> FakeRunner:
        return FakeRunner(stdout=stdout, returncode=returncode, stderr=stderr)

    return _factory


@pytest.fixture
def mock_orbs():
    return [
        {"name": "agent01", "status": "running"},
        {"name": "agent02", "status": "running"},
        {"name": "compiler01", "status": "running"},
        {"name": "webserver01", "status": "running"},
    ]


@pytest.fixture
def mock_vmpooler_payload():
    return {
        "job-1": {
            "state": "filled",
            "allocated_resources": [
                {
                    "hostname": "onetime-algebra.delivery.puppetlabs.net",
                    "type": "win-2019-x86_64",
                }
            ],
        },
        "job-2": {
            "state": "allocated",
            "allocated_resources": [
                {
                    "hostname": "tender-punditry.delivery.puppetlabs.net",
                    "type": "ubuntu-2004-x86_64",
                },
                {
                    "hostname": "normal-meddling.delivery.puppetlabs.net",
                    "type": "ubuntu-2004-x86_64",
                },
            ],
        },
    }


@pytest.fixture
def mock_vmpooler_json(mock_vmpooler_payload):
    return json.dumps(mock_vmpooler_payload)
