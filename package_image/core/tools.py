"""Command lines for the external image tools (buildah, skopeo, trivy)."""

import shlex
from typing import IO, Callable, List, Optional

from ..exceptions import SetupError
from .cosign import CosignClient
from .image import ImageIdentity
from .process import run_command

RunFn = Callable[..., None]


def _bool_flag(value: bool) -> str:
    return "true" if value else "false"


def split_extra_args(raw: str, what: str) -> List[str]:
    """Shell-lex user supplied extra arguments.

    Raises:
        SetupError: ``raw`` is not valid shell syntax.
    """
    try:
        return shlex.split(raw)
    except ValueError as exc:
        raise SetupError(f"parse {what} ({raw}): {exc}") from exc


class ImageTools:
    """Invokes buildah, skopeo, trivy and cosign through ``run``.

    ``run`` has the signature of :func:`run_command`; tests pass a fake.
    """

    def __init__(
        self,
        run: RunFn = run_command,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
    ):
        self.run = run
        self.stdout = stdout
        self.stderr = stderr

    def _run(self, executable: str, args: List[str], cwd: Optional[str] = None) -> None:
        self.run(executable, args, cwd=cwd, stdout=self.stdout, stderr=self.stderr)

    def buildah_build(self, opts, image_id: ImageIdentity) -> None:
        """Build the image from the Dockerfile into local storage."""
        args = [
            f"--storage-driver={opts.storage_driver}",
            "bud",
            f"--format={opts.format}",
            f"--tls-verify={_bool_flag(opts.tls_verify)}",
            "--no-cache",
            f"--file={opts.dockerfile}",
            f"--tag={image_id.namespace_stream_sha()}",
        ]
        args += split_extra_args(opts.buildah_build_extra_args, "buildah build extra args")
        if opts.debug:
            args.append("--log-level=debug")
        args.append(opts.context_dir)
        self._run("buildah", args, cwd=opts.checkout_dir)

    def buildah_push_oci(self, opts, image_id: ImageIdentity, oci_dir: str, digest_file: str) -> None:
        """Export the image to a local OCI layout and record its digest."""
        args = [
            f"--storage-driver={opts.storage_driver}",
            "push",
            f"--digestfile={digest_file}",
        ]
        if opts.debug:
            args.append("--log-level=debug")
        args += [image_id.namespace_stream_sha(), f"oci:{oci_dir}"]
        self._run("buildah", args, cwd=opts.checkout_dir)

    def trivy_sbom(self, opts, oci_dir: str, sbom_file: str) -> None:
        """Scan the exported image and write an SPDX document."""
        args = [
            "image",
            "--format=spdx",
            f"--input={oci_dir}",
            f"--output={sbom_file}",
        ]
        args += split_extra_args(opts.trivy_sbom_extra_args, "trivy SBOM extra args")
        if opts.debug:
            args.append("--debug")
        self._run("trivy", args, cwd=opts.checkout_dir)

    def buildah_push(self, opts, image_id: ImageIdentity) -> None:
        """Push the image from local storage to the registry."""
        args = [
            f"--storage-driver={opts.storage_driver}",
            "push",
            f"--tls-verify={_bool_flag(opts.tls_verify)}",
        ]
        if opts.cert_dir:
            args.append(f"--cert-dir={opts.cert_dir}")
        args += split_extra_args(opts.buildah_push_extra_args, "buildah push extra args")
        if opts.debug:
            args.append("--log-level=debug")
        args += [
            image_id.namespace_stream_sha(),
            f"docker://{image_id.image_ref_with_registry(opts.registry)}",
        ]
        self._run("buildah", args, cwd=opts.checkout_dir)

    def skopeo_tag(self, opts, image_id: ImageIdentity, tag: str) -> None:
        """Copy the pushed image to the same repository under ``tag``."""
        tls_verify = _bool_flag(opts.tls_verify)
        args = ["--debug"] if opts.debug else []
        args += [
            "copy",
            f"--src-tls-verify={tls_verify}",
            f"--dest-tls-verify={tls_verify}",
        ]
        if opts.cert_dir:
            args += [f"--src-cert-dir={opts.cert_dir}", f"--dest-cert-dir={opts.cert_dir}"]
        args += [
            f"docker://{image_id.image_ref_with_registry(opts.registry)}",
            f"docker://{image_id.with_tag(tag).image_ref_with_registry(opts.registry)}",
        ]
        self._run("skopeo", args, cwd=opts.checkout_dir)

    def cosign(self, key: str) -> CosignClient:
        """Client signing with ``key``, running through the same ``run``."""
        return CosignClient(key, run=self.run)
