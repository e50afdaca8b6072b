"""Summary builders for command output formatting."""

from abc import ABC, abstractmethod
from typing import Tuple, List


class SummaryBuilder(ABC):
    """Base class for building command-specific summaries.

    This keeps the Reporter generic and reusable while allowing
    each command to define its own pre-flight and completion displays.
    """

    @abstractmethod
    def build_preflight(self, ctx) -> List[Tuple[str, str]]:
        """Build pre-flight information display.

        Args:
            ctx: Command context before any step has run

        Returns:
            List of (label, value) tuples to display
        """
        pass

    @abstractmethod
    def build_completion(self, outcome) -> Tuple[str, List[Tuple[str, str]]]:
        """Build completion summary display.

        Args:
            outcome: Result of the pipeline run

        Returns:
            Tuple of (title, items)
        """
        pass


class PackageSummary(SummaryBuilder):
    """Pre-flight and completion blocks of the 'package' command."""

    def build_preflight(self, ctx) -> List[Tuple[str, str]]:
        opts = ctx.opts
        return [
            ("→ Packaging", opts.checkout_dir),
            ("Dockerfile", f"{opts.dockerfile} (context: {opts.context_dir})"),
            ("Registry", f"{opts.registry} (TLS verify: {opts.tls_verify})"),
            ("Extra tags", opts.extra_tags or "none"),
            ("Signing", "enabled" if opts.cosign_key else "disabled"),
        ]

    def build_completion(self, outcome) -> Tuple[str, List[Tuple[str, str]]]:
        ctx = outcome.context
        items = [
            ("Image", ctx.artifact_image().image_ref()),
            ("Digest", ctx.digest),
        ]
        if outcome.skipped:
            items.insert(0, ("Reason", outcome.skipped))
        else:
            items.append(("SBOM", ctx.sbom_file))
        if ctx.extra_tags:
            items.append(("Extra tags", ", ".join(ctx.extra_tags)))
        title = "Image already packaged" if outcome.skipped else "Image packaged"
        return f"✓ {title}: {ctx.image_name()}", items
