"""Context object threaded through the pipeline."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple, Union

from ..exceptions import ContextError
from .image import ArtifactImage, ImageIdentity
from .options import PackageOptions
from .reporter import NullReporter, Reporter
from .tools import ImageTools
from .workspace import IMAGE_DIGESTS_PATH, OdsContext

DERIVED_FIELDS = ("ods", "image_id", "extra_tags", "digest", "sbom_file")


@dataclass(frozen=True)
class PackageContext:
    """Shared context for the 'package' command pipeline.

    Every step receives a context and returns a new one. Derived values
    are filled in once by the step responsible for them, via ``derive``.
    """

    opts: PackageOptions
    reporter: Union[Reporter, NullReporter]
    tools: ImageTools

    # State accumulated during pipeline execution
    ods: Optional[OdsContext] = None
    image_id: Optional[ImageIdentity] = None
    extra_tags: Optional[Tuple[str, ...]] = None
    digest: Optional[str] = None
    sbom_file: Optional[str] = None

    def derive(self, **fields) -> "PackageContext":
        """Return a copy with derived fields set.

        Raises:
            ContextError: A field is unknown or was already set.
        """
        for name in fields:
            if name not in DERIVED_FIELDS:
                raise ContextError(f"{name} is not a derived field")
            if getattr(self, name) is not None:
                raise ContextError(f"{name} is already set")
        return replace(self, **fields)

    def with_options(self, opts: PackageOptions) -> "PackageContext":
        """Return a copy with resolved options. Only used during setup."""
        return replace(self, opts=opts)

    # Paths and records derived from the image identity

    def image_name(self) -> str:
        return self.image_id.namespace_stream_sha()

    def checkout_path(self, relpath: str) -> Path:
        return Path(self.opts.checkout_dir) / relpath

    def image_artifact_path(self) -> Path:
        return self.checkout_path(IMAGE_DIGESTS_PATH) / f"{self.image_id.stream}.json"

    def tag_artifact_path(self, tag: str) -> Path:
        return self.checkout_path(IMAGE_DIGESTS_PATH) / f"{self.image_id.stream}-{tag}.json"

    def artifact_image(self) -> ArtifactImage:
        return self.artifact_image_for_tag(self.image_id.tag)

    def artifact_image_for_tag(self, tag: str) -> ArtifactImage:
        image_id = self.image_id.with_tag(tag)
        return ArtifactImage(
            ref=image_id.image_ref_with_registry(self.opts.registry),
            registry=self.opts.registry,
            repository=image_id.namespace,
            name=image_id.stream,
            tag=tag,
            digest=self.digest or "",
        )
