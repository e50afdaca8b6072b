"""Setup steps: read the context cache and derive the image identity.

These run before any external command and report no progress line.
"""

import os
import shlex
from dataclasses import replace

from ...exceptions import SetupError
from ..context import PackageContext
from ..image import create_image_identity, is_kind_registry
from ..workspace import read_ods_context
from .base import BaseStep


class SetupContext(BaseStep):
    """Read the ``.ods`` cache and finalize the options."""

    name = "setup context"

    def counts_as_step(self, ctx: PackageContext) -> bool:
        return False

    def execute(self, ctx: PackageContext) -> PackageContext:
        ods = read_ods_context(ctx.opts.checkout_dir)
        opts = ctx.opts

        # TLS verification of the KinD registry is not possible at the moment as
        # requests error out with "server gave HTTP response to HTTPS client".
        if is_kind_registry(opts.registry) and opts.tls_verify:
            ctx.reporter.dim(f"Disabling TLS verification for {opts.registry}")
            opts = replace(opts, tls_verify=False)

        return ctx.with_options(opts).derive(ods=ods)


class SetExtraTags(BaseStep):
    """Parse the shell-lexed list of extra tags."""

    name = "set extra tags"

    def counts_as_step(self, ctx: PackageContext) -> bool:
        return False

    def execute(self, ctx: PackageContext) -> PackageContext:
        try:
            tags = shlex.split(ctx.opts.extra_tags)
        except ValueError as e:
            raise SetupError(f"parse extra tags ({ctx.opts.extra_tags}): {e}") from e

        # Tags name their artifact file, so they must be plain file names.
        for tag in tags:
            if not tag or "/" in tag or os.sep in tag:
                raise SetupError(f"invalid extra tag {tag!r} in ({ctx.opts.extra_tags})")
        return ctx.derive(extra_tags=tuple(tags))


class SetImageId(BaseStep):
    """Compute namespace, stream and tag of the image."""

    name = "set image id"

    def counts_as_step(self, ctx: PackageContext) -> bool:
        return False

    def execute(self, ctx: PackageContext) -> PackageContext:
        image_id = create_image_identity(ctx.ods, ctx.opts.image_namespace, ctx.opts.image_stream)
        return ctx.derive(image_id=image_id)
