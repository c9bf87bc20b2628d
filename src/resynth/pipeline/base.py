"""Base classes for pipeline stages."""

from abc import ABC, abstractmethod
import time

from resynth.errors import ResynthError
from resynth.models.pipeline import ProcessingContext, StageResult


class PipelineStage(ABC):
    """Abstract base class for pipeline stages.

    Each stage implements execute() which receives a ProcessingContext,
    performs its work (mutating the context), and returns a StageResult.
    Stages report expected failures through the result; anything they raise
    is turned into a failed result by run().
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this stage."""
        ...

    @abstractmethod
    def execute(self, context: ProcessingContext) -> StageResult:
        """Execute this stage.

        Args:
            context: Mutable processing context that accumulates results.

        Returns:
            StageResult indicating success/failure and any warnings.
        """
        ...

    def run(self, context: ProcessingContext) -> StageResult:
        """Run the stage with timing.

        resynth errors keep their own message; any other exception is
        reported as unexpected.
        """
        start_time = time.time()
        try:
            result = self.execute(context)
        except ResynthError as e:
            result = StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=str(e),
            )
        except Exception as e:
            result = StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"Unexpected error: {e}",
            )
        result.duration_seconds = time.time() - start_time
        return result
