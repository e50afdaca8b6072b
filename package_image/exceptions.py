"""Exceptions raised while packaging an image."""

import shlex
from typing import Dict, Sequence


def _join(command: Sequence[str]) -> str:
    return shlex.join([str(part) for part in command])


class PackageImageError(Exception):
    """Base exception for all packaging failures."""


class SetupError(PackageImageError):
    """Bad configuration or unreadable context cache."""


class ContextError(PackageImageError):
    """A derived context field was assigned twice."""


class ArtifactError(PackageImageError):
    """An artifact file could not be checked, read or written."""


class CommandError(PackageImageError):
    """Base class for failures of an external command."""

    def __init__(self, command: Sequence[str], message: str):
        self.command = [str(part) for part in command]
        super().__init__(message)


class CommandStartError(CommandError):
    """The executable could not be started."""

    def __init__(self, command: Sequence[str], cause: OSError):
        self.cause = cause
        super().__init__(command, f"start {command[0]}: {cause}")


class StreamError(CommandError):
    """Reading stdout and/or stderr of a child process failed."""

    def __init__(self, command: Sequence[str], errors: Dict[str, BaseException]):
        self.errors = dict(errors)
        details = ", ".join(f"scan {name} = {exc}" for name, exc in self.errors.items())
        super().__init__(command, f"collect output of {_join(command)}: {details}")


class ExitStatusError(CommandError):
    """The child process exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int):
        self.returncode = returncode
        super().__init__(command, f"{_join(command)}: exit status {returncode}")


class CosignError(PackageImageError):
    """A cosign invocation failed."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(f"{message} - {stderr}" if stderr else message)


class StepError(PackageImageError):
    """A pipeline step failed. The original exception is chained."""

    def __init__(self, step_name: str, cause: BaseException):
        self.step_name = step_name
        self.cause = cause
        super().__init__(f"{step_name}: {cause}")


class SkipRemainingSteps(Exception):
    """Ends the pipeline early as a success.

    Not a PackageImageError: callers catching failures never see it.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ExtraTagError(PackageImageError):
    """Pushing an extra tag failed."""

    def __init__(self, tag: str, cause: BaseException):
        self.tag = tag
        super().__init__(f"push extra tag {tag}: {cause}")
