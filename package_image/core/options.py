"""Options dataclasses for command configuration."""

from dataclasses import dataclass

from ..config import defaults


@dataclass(frozen=True)
class PackageOptions:
    """Configuration options for the 'package' command."""

    # Source
    checkout_dir: str = "."
    dockerfile: str = defaults.dockerfile
    context_dir: str = defaults.context_dir

    # Image identity (empty means derive from the context cache)
    image_namespace: str = ""
    image_stream: str = ""
    extra_tags: str = ""

    # Registry
    registry: str = defaults.registry
    cert_dir: str = defaults.cert_dir
    tls_verify: bool = True

    # Build tooling
    storage_driver: str = defaults.storage_driver
    format: str = defaults.format
    buildah_build_extra_args: str = ""
    buildah_push_extra_args: str = ""
    trivy_sbom_extra_args: str = ""

    # Signing (empty disables signing)
    cosign_key: str = ""

    # Output
    results_dir: str = defaults.results_dir
    debug: bool = False
