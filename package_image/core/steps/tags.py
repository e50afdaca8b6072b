"""Idempotent processing of extra image tags."""

from ...exceptions import ExtraTagError, PackageImageError
from ..context import PackageContext
from ..workspace import IMAGE_DIGESTS_PATH, artifact_exists, write_json_artifact
from .base import BaseStep


class ProcessExtraTags(BaseStep):
    """Push every extra tag that has no artifact yet.

    The artifact file of a tag is its completion marker: tags whose file
    exists are left alone, so a re-run only pushes what is missing. Tags
    are pushed one after the other, in the order given.
    """

    name = "process extra tags"

    def should_run(self, ctx: PackageContext) -> bool:
        """Only run if extra tags were requested."""
        return bool(ctx.opts.extra_tags.strip())

    def execute(self, ctx: PackageContext) -> PackageContext:
        if not ctx.extra_tags:
            return ctx

        with ctx.reporter.step(f"Processing extra tags: {', '.join(ctx.extra_tags)}"):
            for tag in ctx.extra_tags:
                marker = ctx.tag_artifact_path(tag)
                if artifact_exists(marker):
                    ctx.reporter.info(f"Artifact exists for tag: {tag}")
                    continue

                ctx.reporter.info(f"Pushing extra tag: {tag}")
                try:
                    ctx.tools.skopeo_tag(ctx.opts, ctx.image_id, tag)
                except PackageImageError as e:
                    raise ExtraTagError(tag, e) from e

                ctx.reporter.info(f"Writing image artifact for tag: {tag}")
                write_json_artifact(
                    ctx.artifact_image_for_tag(tag).to_dict(),
                    ctx.checkout_path(IMAGE_DIGESTS_PATH),
                    marker.name,
                )

        return ctx
