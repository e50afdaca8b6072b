"""Commands of the ods-package-image CLI."""

from .package import package_command, run_package

__all__ = ["package_command", "run_package"]
