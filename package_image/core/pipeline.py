"""Pipeline orchestrator for executing steps in sequence."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..exceptions import SkipRemainingSteps, StepError
from .context import PackageContext
from .steps.base import BaseStep


@dataclass(frozen=True)
class PipelineOutcome:
    """Final context of a successful run and the skip reason, if any."""

    context: PackageContext
    skipped: Optional[str] = None


def _count_steps(ctx: PackageContext, steps: Sequence[BaseStep]) -> int:
    return sum(1 for step in steps if step.should_run(ctx) and step.counts_as_step(ctx))


def _execute(ctx: PackageContext, steps: Sequence[BaseStep]) -> PipelineOutcome:
    for step in steps:
        if not step.should_run(ctx):
            continue

        try:
            result = step.execute(ctx)
        except SkipRemainingSteps as skip:
            ctx.reporter.info(skip.reason)
            return PipelineOutcome(context=ctx, skipped=skip.reason)
        except Exception as e:
            raise StepError(step.name, e) from e

        if result is None:
            raise StepError(step.name, TypeError("step returned no context"))
        ctx = result

    return PipelineOutcome(context=ctx)


def run_steps(ctx: PackageContext, steps: Sequence[BaseStep]) -> PipelineOutcome:
    """Execute steps in order, threading the context through them.

    Args:
        ctx: The initial context
        steps: Steps to execute in order

    The pipeline will:
    1. Count the steps that report progress
    2. Hand the context returned by each step to the next one
    3. Stop successfully when a step raises SkipRemainingSteps
    4. Stop on any other exception, re-raised as StepError

    Side effects of earlier steps are never rolled back.
    """
    ctx.reporter.set_total_steps(_count_steps(ctx, steps))
    return _execute(ctx, steps)


def run_phases(ctx: PackageContext, phases: Sequence[Sequence[BaseStep]]) -> PipelineOutcome:
    """Execute phases one after the other with a single progress count.

    A skip ends only the phase it is raised in; the next phase starts
    with the context the skipped phase had reached. The outcome keeps
    the first skip reason. Errors stop everything, as in ``run_steps``.
    """
    ctx.reporter.set_total_steps(sum(_count_steps(ctx, steps) for steps in phases))

    skipped = None
    for steps in phases:
        outcome = _execute(ctx, steps)
        ctx = outcome.context
        skipped = skipped or outcome.skipped
    return PipelineOutcome(context=ctx, skipped=skipped)
