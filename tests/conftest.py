"""Pytest configuration and shared fixtures."""
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest
from click.testing import CliRunner

from package_image.core import ImageTools, PackageContext, PackageOptions, RecordingReporter
from package_image.exceptions import ExitStatusError

DIGEST = "sha256:abc123def456"
REGISTRY = "registry.example.com"


class FakeRunner:
    """Stands in for run_command and records every invocation.

    Writes the files the real tools would produce: the digest file of
    ``buildah push --digestfile=...`` and the SBOM of ``trivy --output=...``.
    """

    def __init__(self, fail_when: Optional[Callable[[str, List[str]], bool]] = None):
        self.calls: List[Tuple[str, List[str]]] = []
        self.fail_when = fail_when

    def __call__(self, executable, args=(), *, env=None, cwd=None, stdout=None, stderr=None):
        args = list(args)
        self.calls.append((executable, args))
        if self.fail_when is not None and self.fail_when(executable, args):
            raise ExitStatusError([executable, *args], 1)
        for arg in args:
            if arg.startswith("--digestfile="):
                Path(arg.split("=", 1)[1]).write_text(DIGEST + "\n")
            if executable == "trivy" and arg.startswith("--output="):
                Path(arg.split("=", 1)[1]).write_text('{"spdxVersion": "SPDX-2.3"}\n')

    def executables(self) -> List[str]:
        return [exe for exe, _ in self.calls]

    def calls_to(self, executable: str) -> List[List[str]]:
        return [args for exe, args in self.calls if exe == executable]


def fail_for_tag(tag: str) -> Callable[[str, List[str]], bool]:
    """Makes the skopeo copy to ``tag`` fail."""
    return lambda exe, args: exe == "skopeo" and args[-1].endswith(f":{tag}")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def runner() -> FakeRunner:
    """Fake command runner that succeeds for every tool."""
    return FakeRunner()


@pytest.fixture
def checkout(tmp_path) -> Path:
    """Checkout directory with a populated .ods context cache."""
    repo = tmp_path / "repo"
    ods = repo / ".ods"
    ods.mkdir(parents=True)
    (ods / "namespace").write_text("foo-dev\n")
    (ods / "component").write_text("app\n")
    (ods / "git-commit-sha").write_text("abc123\n")
    (ods / "project").write_text("foo\n")
    return repo


@pytest.fixture
def results_dir(tmp_path) -> Path:
    """Directory receiving the result files."""
    return tmp_path / "results"


@pytest.fixture
def make_opts(checkout, results_dir):
    """Build PackageOptions pointing at the test checkout."""
    def _make(**overrides) -> PackageOptions:
        values = dict(checkout_dir=str(checkout), results_dir=str(results_dir), registry=REGISTRY)
        values.update(overrides)
        return PackageOptions(**values)
    return _make


@pytest.fixture
def make_context(make_opts, runner):
    """Build a PackageContext with a recording reporter and the fake runner."""
    def _make(**overrides) -> PackageContext:
        return PackageContext(
            opts=make_opts(**overrides),
            reporter=RecordingReporter(),
            tools=ImageTools(run=runner),
        )
    return _make
