"""Defaults and environment handling for the package command."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "ODS_PACKAGE_IMAGE"


class Defaults:
    registry = "image-registry.openshift-image-registry.svc:5000"
    cert_dir = "/etc/containers/certs.d"
    storage_driver = "vfs"
    format = "oci"
    dockerfile = "./Dockerfile"
    context_dir = "docker"
    results_dir = "/tekton/results"


defaults = Defaults


def envvar(name: str) -> str:
    """Environment variable that backs the option ``name``."""
    return f"{ENV_PREFIX}_{name.upper().replace('-', '_')}"


def load_env_file(path: Optional[Path] = None) -> bool:
    """Load a ``.env`` file without overriding variables already set.

    Returns:
        True if a file was found and loaded.
    """
    env_file = path or Path.cwd() / ".env"
    if not env_file.is_file():
        return False
    return load_dotenv(env_file, override=False)
