"""Reporter classes for controlling command output."""

from contextlib import contextmanager
from typing import Optional, Generator, List, Tuple

from ..utils import console, timed_step_status


class Reporter:
    """Default reporter that prints numbered, timed steps."""

    def __init__(self):
        self.current_step = 0
        self.total_steps = 0

    def set_total_steps(self, total: int) -> None:
        """Set the total number of steps for progress tracking."""
        self.total_steps = total
        self.current_step = 0

    @contextmanager
    def step(self, title: str) -> Generator[None, None, None]:
        """Execute a step with a timed progress line.

        Args:
            title: Step description (e.g., "Building image")
        """
        self.current_step += 1
        with timed_step_status(self.current_step, self.total_steps, title):
            yield

    def preflight_block(self, items: List[Tuple[str, str]]) -> None:
        """Display a pre-flight information block.

        Args:
            items: List of (label, value) tuples
                  - If label starts with "→", format as section header
                  - Otherwise, format as "   label: value"
        """
        for label, value in items:
            if label.startswith("→"):
                console.print(f"{label} {value}")
            else:
                console.print(f"   {label}: {value}")
        console.print()

    def summary_block(self, title: str, items: List[Tuple[str, str]], separator: str = "─" * 50) -> None:
        """Display a summary block with separators."""
        console.print(f"\n{separator}")
        console.success(title)
        for label, value in items:
            console.print(f"   {label}: {value}")
        console.print(f"{separator}\n")

    def info(self, message: str) -> None:
        """Display an info message."""
        console.info(message)

    def warning(self, message: str) -> None:
        """Display a warning message."""
        console.warning(message)

    def dim(self, message: str) -> None:
        """Display a dimmed/secondary message."""
        console.dim(message)


class NullReporter:
    """No-op reporter for testing."""

    def set_total_steps(self, total: int) -> None:
        pass

    @contextmanager
    def step(self, title: str) -> Generator[None, None, None]:
        yield

    def preflight_block(self, items: List[Tuple[str, str]]) -> None:
        pass

    def summary_block(self, title: str, items: List[Tuple[str, str]], separator: str = "─" * 50) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def dim(self, message: str) -> None:
        pass


class RecordingReporter(NullReporter):
    """Reporter that keeps messages in memory."""

    def __init__(self):
        self.steps: List[str] = []
        self.messages: List[Tuple[str, str]] = []

    @contextmanager
    def step(self, title: str) -> Generator[None, None, None]:
        self.steps.append(title)
        yield

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def texts(self, level: Optional[str] = None) -> List[str]:
        """Messages recorded so far, optionally only for ``level``."""
        return [text for lvl, text in self.messages if level is None or lvl == level]
