"""Thin client for the cosign signing tool."""

import io
from typing import Callable, List

from ..exceptions import CommandError, CosignError
from .image import is_kind_registry
from .process import run_command


class CosignClient:
    """Signs images and attests predicates with a given key."""

    def __init__(self, key: str, run: Callable[..., None] = run_command, exe: str = "cosign"):
        self.exe = exe
        self.key = key
        self.run = run

    def sign(self, image_ref: str) -> None:
        """Sign ``image_ref``."""
        self._run_cmd(["sign", *self._common_args(image_ref), image_ref])

    def attest(self, image_ref: str, predicate_type: str, predicate: str) -> None:
        """Attest ``predicate`` of ``predicate_type`` against ``image_ref``."""
        self._run_cmd([
            "attest",
            *self._common_args(image_ref),
            "--type", predicate_type,
            "--predicate", predicate,
            image_ref,
        ])

    def _common_args(self, image_ref: str) -> List[str]:
        args = ["--tlog-upload=false", "--key", self.key]
        if is_kind_registry(image_ref):
            args += ["--allow-insecure-registry=true", "--allow-http-registry=true"]
        return args

    def _run_cmd(self, args: List[str]) -> None:
        # stdout is discarded, stderr is kept for the error message
        stdout, stderr = io.StringIO(), io.StringIO()
        try:
            self.run(self.exe, args, stdout=stdout, stderr=stderr)
        except CommandError as exc:
            raise CosignError(f"cosign cmd: {exc}", stderr.getvalue().strip()) from exc
