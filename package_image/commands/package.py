"""Package image command."""

from typing import Optional, Union

import click

from ..config import defaults, envvar
from ..core import (
    ImageTools,
    NullReporter,
    PackageContext,
    PackageOptions,
    PackageSummary,
    PipelineOutcome,
    Reporter,
    run_phases,
)
from ..core.steps import default_steps
from ..utils import handle_errors


def run_package(
    opts: PackageOptions,
    reporter: Optional[Union[Reporter, NullReporter]] = None,
    tools: Optional[ImageTools] = None,
) -> PipelineOutcome:
    """Run the complete packaging pipeline for ``opts``."""
    reporter = reporter or Reporter()
    ctx = PackageContext(opts=opts, reporter=reporter, tools=tools or ImageTools())
    summary = PackageSummary()

    reporter.preflight_block(summary.build_preflight(ctx))
    outcome = run_phases(ctx, default_steps())
    title, items = summary.build_completion(outcome)
    reporter.summary_block(title, items)
    return outcome


@click.command("package")
@click.option("--checkout-dir", default=".", show_default=True, envvar=envvar("checkout-dir"),
              type=click.Path(exists=True, file_okay=False), help="Checkout directory holding the .ods cache")
@click.option("--dockerfile", default=defaults.dockerfile, show_default=True, envvar=envvar("dockerfile"),
              help="Dockerfile, relative to the checkout directory")
@click.option("--context-dir", default=defaults.context_dir, show_default=True, envvar=envvar("context-dir"),
              help="Build context, relative to the checkout directory")
@click.option("--image-namespace", default="", envvar=envvar("image-namespace"),
              help="Image namespace (defaults to the pipeline namespace)")
@click.option("--image-stream", default="", envvar=envvar("image-stream"),
              help="Image stream (defaults to the component name)")
@click.option("--extra-tags", default="", envvar=envvar("extra-tags"),
              help="Additional tags to push, shell-quoted and space separated")
@click.option("--registry", default=defaults.registry, show_default=True, envvar=envvar("registry"),
              help="Registry to push the image to")
@click.option("--cert-dir", default=defaults.cert_dir, show_default=True, envvar=envvar("cert-dir"),
              help="Certificates directory for the registry")
@click.option("--tls-verify/--no-tls-verify", default=True, show_default=True, envvar=envvar("tls-verify"),
              help="Verify TLS when talking to the registry")
@click.option("--storage-driver", default=defaults.storage_driver, show_default=True,
              envvar=envvar("storage-driver"), help="buildah storage driver")
@click.option("--format", "image_format", default=defaults.format, show_default=True, envvar=envvar("format"),
              type=click.Choice(["oci", "docker"]), help="Image format")
@click.option("--buildah-build-extra-args", default="", envvar=envvar("buildah-build-extra-args"),
              help="Extra arguments for buildah bud")
@click.option("--buildah-push-extra-args", default="", envvar=envvar("buildah-push-extra-args"),
              help="Extra arguments for buildah push")
@click.option("--trivy-sbom-extra-args", default="", envvar=envvar("trivy-sbom-extra-args"),
              help="Extra arguments for trivy")
@click.option("--cosign-key", default="", envvar=envvar("cosign-key"),
              help="cosign key reference; signing is disabled when empty")
@click.option("--results-dir", default=defaults.results_dir, show_default=True, envvar=envvar("results-dir"),
              help="Directory receiving the image-ref and image-digest results")
@click.option("--debug", is_flag=True, envvar=envvar("debug"), help="Verbose tool output")
@handle_errors
def package_command(
    checkout_dir: str,
    dockerfile: str,
    context_dir: str,
    image_namespace: str,
    image_stream: str,
    extra_tags: str,
    registry: str,
    cert_dir: str,
    tls_verify: bool,
    storage_driver: str,
    image_format: str,
    buildah_build_extra_args: str,
    buildah_push_extra_args: str,
    trivy_sbom_extra_args: str,
    cosign_key: str,
    results_dir: str,
    debug: bool,
):
    """Build, scan, push and optionally sign a container image.

    \b
    Reads the pipeline context from CHECKOUT_DIR/.ods, tags the image
    with the current commit SHA and records the result as artifacts.
    Re-running after success skips the build and only pushes extra
    tags that have no artifact yet.

    \b
    Examples:
      ods-package-image package
      ods-package-image package --extra-tags "latest v1.2.0"
      ods-package-image package --cosign-key k8s://ns/cosign-key
    """
    opts = PackageOptions(
        checkout_dir=checkout_dir,
        dockerfile=dockerfile,
        context_dir=context_dir,
        image_namespace=image_namespace,
        image_stream=image_stream,
        extra_tags=extra_tags,
        registry=registry,
        cert_dir=cert_dir,
        tls_verify=tls_verify,
        storage_driver=storage_driver,
        format=image_format,
        buildah_build_extra_args=buildah_build_extra_args,
        buildah_push_extra_args=buildah_push_extra_args,
        trivy_sbom_extra_args=trivy_sbom_extra_args,
        cosign_key=cosign_key,
        results_dir=results_dir,
        debug=debug,
    )
    run_package(opts)
