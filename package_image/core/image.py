"""Image identity and image artifact records."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

KIND_REGISTRY_PREFIX = "kind-registry.kind"


def is_kind_registry(ref: str) -> bool:
    """Whether ``ref`` points at the local KinD registry."""
    return ref.startswith(KIND_REGISTRY_PREFIX)


@dataclass(frozen=True)
class ImageIdentity:
    """Where a built image lives: namespace, stream and tag."""

    namespace: str
    stream: str
    tag: str

    def namespace_stream_sha(self) -> str:
        return f"{self.namespace}/{self.stream}:{self.tag}"

    def image_ref_with_registry(self, registry: str) -> str:
        return f"{registry}/{self.namespace_stream_sha()}"

    def with_tag(self, tag: str) -> "ImageIdentity":
        return replace(self, tag=tag)


def create_image_identity(ods, namespace: str = "", stream: str = "") -> ImageIdentity:
    """Build the identity of the image for the current commit.

    Args:
        ods: Context cache of the checkout.
        namespace: Overrides the context namespace when non-empty.
        stream: Overrides the component name when non-empty.
    """
    return ImageIdentity(
        namespace=namespace or ods.namespace,
        stream=stream or ods.component,
        tag=ods.git_commit_sha,
    )


@dataclass(frozen=True)
class ArtifactImage:
    """JSON record written for every pushed image or extra tag."""

    ref: str
    registry: str
    repository: str
    name: str
    tag: str
    digest: str

    def image_ref(self) -> str:
        """Fully qualified reference pinned to the digest."""
        return f"{self.registry}/{self.repository}/{self.name}@{self.digest}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArtifactImage":
        return cls(
            ref=data.get("ref", ""),
            registry=data.get("registry", ""),
            repository=data.get("repository", ""),
            name=data.get("name", ""),
            tag=data.get("tag", ""),
            digest=data.get("digest", ""),
        )
