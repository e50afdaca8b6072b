"""Base step class for the pipeline."""

from abc import ABC, abstractmethod


class BaseStep(ABC):
    """Base class for all pipeline steps.

    Steps are the building blocks of the package pipeline.
    Each step:
    1. Checks if it should run (should_run)
    2. Executes its logic (execute)
    3. Returns a new context carrying its results

    Steps hold no state of their own and never modify the context they
    receive; everything they produce travels in the returned context.
    A step may raise SkipRemainingSteps to end its phase successfully.
    """

    #: Identity used when reporting failures
    name: str = "step"

    def should_run(self, ctx) -> bool:
        """Determine if this step should execute.

        Override this to conditionally skip steps based on options.
        Only look at ``ctx.opts`` here: the pipeline asks before any
        step has run, to count progress steps.
        """
        return True

    def counts_as_step(self, ctx) -> bool:
        """Determine if this step shows a numbered progress line."""
        return True

    @abstractmethod
    def execute(self, ctx):
        """Execute the step's main logic.

        Args:
            ctx: The pipeline context (read only)

        Returns:
            The context for the next step
        """
        pass
