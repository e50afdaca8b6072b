"""Image signing step."""

from ..context import PackageContext
from ..workspace import SBOMS_FORMAT
from .base import BaseStep


class SignImage(BaseStep):
    """Sign the pushed image and attest its SBOM with cosign."""

    name = "sign image"

    def should_run(self, ctx: PackageContext) -> bool:
        """Only run if a signing key is configured."""
        return bool(ctx.opts.cosign_key)

    def execute(self, ctx: PackageContext) -> PackageContext:
        image_ref = ctx.artifact_image().image_ref()
        client = ctx.tools.cosign(ctx.opts.cosign_key)

        with ctx.reporter.step(f"Signing image {ctx.image_name()} with {ctx.opts.cosign_key}"):
            client.sign(image_ref)
            client.attest(image_ref, SBOMS_FORMAT, ctx.sbom_file)

        return ctx
