"""Steps writing and reading the image artifact, and writing the result files."""

from pathlib import Path

from ...exceptions import ArtifactError
from ..context import PackageContext
from ..image import ArtifactImage
from ..workspace import IMAGE_DIGESTS_PATH, SBOMS_PATH, copy_artifact, read_json_artifact, write_json_artifact
from .base import BaseStep

IMAGE_REF_RESULT = "image-ref"
IMAGE_DIGEST_RESULT = "image-digest"


def write_results(results_dir: str, image: ArtifactImage) -> None:
    """Write the ``image-ref`` and ``image-digest`` result files."""
    target = Path(results_dir)
    try:
        target.mkdir(parents=True, exist_ok=True)
        (target / IMAGE_REF_RESULT).write_text(image.image_ref(), encoding="utf-8")
        (target / IMAGE_DIGEST_RESULT).write_text(image.digest, encoding="utf-8")
    except OSError as e:
        raise ArtifactError(f"write results: {e}") from e


class StoreArtifact(BaseStep):
    """Write the image artifact record and copy the SBOM to the artifacts."""

    name = "store artifact"

    def execute(self, ctx: PackageContext) -> PackageContext:
        with ctx.reporter.step("Writing image and SBOM artifacts"):
            write_json_artifact(
                ctx.artifact_image().to_dict(),
                ctx.checkout_path(IMAGE_DIGESTS_PATH),
                ctx.image_artifact_path().name,
            )
            copy_artifact(ctx.sbom_file, ctx.checkout_path(SBOMS_PATH))
        return ctx


class LoadImageArtifact(BaseStep):
    """Take the digest from the image artifact when this run built nothing.

    Extra tag markers and result files then describe the image that was
    pushed by the run which wrote the artifact.
    """

    name = "load image artifact"

    def counts_as_step(self, ctx: PackageContext) -> bool:
        return False

    def execute(self, ctx: PackageContext) -> PackageContext:
        if ctx.digest is not None:
            return ctx

        path = ctx.image_artifact_path()
        image = ArtifactImage.from_dict(read_json_artifact(path))
        if not image.digest:
            raise ArtifactError(f"read artifact {path}: no digest recorded")
        ctx.reporter.dim(f"Image digest from artifact: {image.digest}")
        return ctx.derive(digest=image.digest)


class StoreResults(BaseStep):
    """Write the result files consumed by the CI system."""

    name = "store results"

    def execute(self, ctx: PackageContext) -> PackageContext:
        with ctx.reporter.step("Writing image-ref result"):
            write_results(ctx.opts.results_dir, ctx.artifact_image())
        return ctx
