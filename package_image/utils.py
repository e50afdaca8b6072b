"""CLI utilities and decorators."""
import sys
import time
from functools import wraps
from contextlib import contextmanager

import click
from rich.markup import escape

from .exceptions import PackageImageError
from .themed_console import ThemedConsole

console = ThemedConsole()


@contextmanager
def timed_step_status(step: int, total: int, title: str):
    """Print a numbered step line and report how long it took."""
    prefix = f"[{step}/{total}]" if total else f"[{step}]"
    console.print(f"[bold]{escape(prefix)}[/bold] {escape(title)} ...")
    started = time.monotonic()
    try:
        yield
    except Exception:
        console.error(f"✗ {escape(title)} failed after {time.monotonic() - started:.1f}s")
        raise
    console.success(f"✓ {escape(title)} ({time.monotonic() - started:.1f}s)")


def handle_errors(func):
    """Decorator that reports errors and exits with status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except PackageImageError as e:
            console.error(f"Error: {escape(str(e))}")
            sys.exit(1)
        except Exception as e:
            console.error(f"Unexpected error: {escape(str(e))}")
            sys.exit(1)
    return wrapper
