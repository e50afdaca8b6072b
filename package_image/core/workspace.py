"""Checkout layout: the ``.ods`` context cache and the artifacts area."""

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from ..exceptions import ArtifactError, SetupError

ODS_DIR = ".ods"
TMP_DIR = ".ods/tmp"
IMAGE_DIGESTS_PATH = ".ods/artifacts/image-digests"
SBOMS_PATH = ".ods/artifacts/sboms"
SBOMS_FORMAT = "spdx"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class OdsContext:
    """Values cached by earlier pipeline tasks in ``.ods/``."""

    namespace: str
    component: str
    git_commit_sha: str
    project: str = ""
    git_ref: str = ""
    git_url: str = ""


_REQUIRED = {
    "namespace": "namespace",
    "component": "component",
    "git_commit_sha": "git-commit-sha",
}
_OPTIONAL = {
    "project": "project",
    "git_ref": "git-ref",
    "git_url": "git-url",
}


def _read_trimmed(path: Path) -> str:
    return path.read_text(encoding="utf-8").strip()


def read_ods_context(checkout_dir: PathLike) -> OdsContext:
    """Read the context cache of ``checkout_dir``.

    Raises:
        SetupError: A required file is missing, unreadable or empty.
    """
    ods_dir = Path(checkout_dir) / ODS_DIR
    values: Dict[str, str] = {}
    for field, filename in _REQUIRED.items():
        path = ods_dir / filename
        try:
            values[field] = _read_trimmed(path)
        except OSError as exc:
            raise SetupError(f"read cache: {exc}") from exc
        if not values[field]:
            raise SetupError(f"read cache: {path} is empty")
    for field, filename in _OPTIONAL.items():
        path = ods_dir / filename
        if path.is_file():
            values[field] = _read_trimmed(path)
    return OdsContext(**values)


def artifact_exists(path: PathLike) -> bool:
    """Whether the artifact marker at ``path`` is present.

    Only absence counts as "not done"; any other I/O failure is raised.

    Raises:
        ArtifactError: The file could not be checked.
    """
    try:
        Path(path).stat()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise ArtifactError(f"check artifact {path}: {exc}") from exc
    return True


def write_json_artifact(data: Dict[str, Any], artifacts_dir: PathLike, filename: str) -> Path:
    """Write ``data`` as ``artifacts_dir/filename``, overwriting it."""
    target = Path(artifacts_dir) / filename
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ArtifactError(f"write artifact {target}: {exc}") from exc
    return target


def copy_artifact(source: PathLike, artifacts_dir: PathLike) -> Path:
    """Copy ``source`` into ``artifacts_dir`` keeping its file name."""
    source = Path(source)
    target = Path(artifacts_dir) / source.name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as exc:
        raise ArtifactError(f"copy artifact {source}: {exc}") from exc
    return target


def read_digest_file(path: PathLike) -> str:
    """Read the single-line digest written by the build tool."""
    try:
        digest = _read_trimmed(Path(path))
    except OSError as exc:
        raise ArtifactError(f"read image digest: {exc}") from exc
    if not digest:
        raise ArtifactError(f"read image digest: {path} is empty")
    return digest


def read_json_artifact(path: PathLike) -> Dict[str, Any]:
    """Read a JSON artifact written by ``write_json_artifact``."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ArtifactError(f"read artifact {path}: {exc}") from exc
