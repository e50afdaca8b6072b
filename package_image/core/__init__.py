"""Core infrastructure for step-based image packaging."""

from .context import PackageContext
from .options import PackageOptions
from .pipeline import PipelineOutcome, run_phases, run_steps
from .process import collect_output, run_command
from .reporter import Reporter, NullReporter, RecordingReporter
from .summary import PackageSummary, SummaryBuilder
from .tools import ImageTools

__all__ = [
    "PackageContext",
    "PackageOptions",
    "PipelineOutcome",
    "run_steps",
    "run_phases",
    "collect_output",
    "run_command",
    "Reporter",
    "NullReporter",
    "RecordingReporter",
    "PackageSummary",
    "SummaryBuilder",
    "ImageTools",
]
