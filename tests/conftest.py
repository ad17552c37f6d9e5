"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Generator

import pytest

from flake_junit.checks.models import CheckOutcome
from flake_junit.core.config.settings import get_settings
from flake_junit.nix.models import BuildDerivation, BuildMode

SYSTEM = "x86_64-linux"


def derivation(name: str) -> BuildDerivation:
    """Build result entry for a derivation called ``name``."""
    return BuildDerivation.model_validate(
        {
            "drvPath": f"/nix/store/{name}.drv",
            "outputs": {"out": f"/nix/store/{name}"},
        }
    )


class RecordingObserver:
    """Observer that keeps every event in memory, in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def on_invocation_start(self, command: list[str]) -> None:
        self.events.append(("invocation_start", list(command)))

    def on_invocation_end(
        self,
        command: list[str],
        return_code: int | None,
        duration_seconds: float,
    ) -> None:
        self.events.append(("invocation_end", (list(command), return_code)))

    def on_outcome_recorded(self, outcome: CheckOutcome) -> None:
        self.events.append(("outcome_recorded", outcome))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


class FakeNixClient:
    """Scripted stand-in for NixClient.

    ``dry_run``, ``real`` and ``logs`` map an installable (or a derivation
    path for ``logs``) to a result or to an exception to raise. Unlisted
    installables resolve to a single derivation named after the check key
    and build successfully; unlisted logs return ``"log of <drv>"``.
    """

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        system: str = SYSTEM,
        dry_run: dict[str, Any] | None = None,
        real: dict[str, Any] | None = None,
        logs: dict[str, Any] | None = None,
    ) -> None:
        self.document = document if document is not None else {"checks": {system: {}}}
        self.system = system
        self.dry_run = dry_run or {}
        self.real = real or {}
        self.logs = logs or {}
        self.calls: list[tuple[Any, ...]] = []

    async def show(self) -> dict[str, Any]:
        self.calls.append(("show",))
        if isinstance(self.document, Exception):
            raise self.document
        return self.document

    async def current_system(self) -> str:
        self.calls.append(("current_system",))
        return self.system

    async def build(
        self,
        target: str,
        mode: BuildMode,
        extra_options: list[str] | None = None,
    ) -> list[BuildDerivation]:
        self.calls.append(("build", target, mode, list(extra_options or [])))
        table = self.dry_run if mode == BuildMode.DRY_RUN else self.real
        result = table.get(target, [derivation(target.rsplit(".", 1)[-1])])
        if isinstance(result, Exception):
            raise result
        return result

    async def log(self, drv_path: str) -> str:
        self.calls.append(("log", drv_path))
        result = self.logs.get(drv_path, f"log of {drv_path}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def recording_observer() -> RecordingObserver:
    """Observer that records events for assertions."""
    return RecordingObserver()


@pytest.fixture
def fake_nix() -> type[FakeNixClient]:
    """The FakeNixClient class, to be instantiated with scripted results."""
    return FakeNixClient


@pytest.fixture
def make_derivation():
    """Factory for nix build result entries."""
    return derivation


@pytest.fixture
def system() -> str:
    """System used by the test flakes."""
    return SYSTEM
