from abc import ABC, abstractmethod
from .models import Invocation, EngineResult

class ITranscodingEngine(ABC):
    """
    Contract for the external transcoding engine.
    Abstracts away the underlying tool (FFmpeg) from the job pipeline.
    """

    @abstractmethod
    def execute(self, invocation: Invocation) -> EngineResult:
        """
        Runs a single invocation to completion.

        Args:
            invocation: The Invocation built by the command builder.

        Returns:
            EngineResult with the raw status code. For probe invocations,
            structured_output holds the media properties.

        Raises:
            EngineError: If the engine could not be started or its output is unreadable.
        """
        pass
