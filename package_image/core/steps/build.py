"""Steps building, scanning and pushing the image."""

from ...exceptions import SkipRemainingSteps
from ..context import PackageContext
from ..workspace import SBOMS_FORMAT, TMP_DIR, artifact_exists, read_digest_file
from .base import BaseStep

OCI_DIR = "image"
DIGEST_FILE = "image-digest"


class SkipIfImageArtifactExists(BaseStep):
    """Skip building and pushing if the image artifact is already in place.

    Only the presence of the artifact file counts. Extra tags and result
    files are handled by the publish phase, which runs either way.
    """

    name = "skip if image artifact exists"

    def counts_as_step(self, ctx: PackageContext) -> bool:
        return False

    def execute(self, ctx: PackageContext) -> PackageContext:
        path = ctx.image_artifact_path()
        ctx.reporter.info(f"Checking if image artifact for {ctx.image_name()} exists already ...")
        if not artifact_exists(path):
            return ctx
        raise SkipRemainingSteps(f"Image artifact exists already: {path}")


class BuildImage(BaseStep):
    """Build the image and export it to a local OCI folder."""

    name = "build image"

    def execute(self, ctx: PackageContext) -> PackageContext:
        tmp_dir = ctx.checkout_path(TMP_DIR)
        tmp_dir.mkdir(parents=True, exist_ok=True)
        digest_file = tmp_dir / DIGEST_FILE

        with ctx.reporter.step(f"Building image {ctx.image_name()}"):
            ctx.tools.buildah_build(ctx.opts, ctx.image_id)
            ctx.reporter.dim(f"Creating local OCI folder for image {ctx.image_name()}")
            ctx.tools.buildah_push_oci(ctx.opts, ctx.image_id, str(tmp_dir / OCI_DIR), str(digest_file))
            digest = read_digest_file(digest_file)

        ctx.reporter.dim(f"Image digest: {digest}")
        return ctx.derive(digest=digest)


class GenerateSBOM(BaseStep):
    """Generate the SPDX SBOM of the exported image with trivy."""

    name = "generate SBOM"

    def execute(self, ctx: PackageContext) -> PackageContext:
        tmp_dir = ctx.checkout_path(TMP_DIR)
        sbom_file = tmp_dir / f"{ctx.image_id.stream}.{SBOMS_FORMAT}"

        with ctx.reporter.step("Generating image SBOM with trivy scanner"):
            ctx.tools.trivy_sbom(ctx.opts, str(tmp_dir / OCI_DIR), str(sbom_file))

        return ctx.derive(sbom_file=str(sbom_file))


class PushImage(BaseStep):
    """Push the image to the registry."""

    name = "push image"

    def execute(self, ctx: PackageContext) -> PackageContext:
        with ctx.reporter.step(f"Pushing image {ctx.image_name()} to {ctx.opts.registry}"):
            ctx.tools.buildah_push(ctx.opts, ctx.image_id)
        return ctx
