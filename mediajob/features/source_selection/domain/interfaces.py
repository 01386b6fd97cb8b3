from abc import ABC, abstractmethod
from .models import SourceResult

class ISourceSelector(ABC):
    """
    Contract for the source picker.
    """

    @abstractmethod
    def pick_source(self) -> SourceResult:
        """
        Asks for a source reference.

        Returns:
            SourceResult.picked(uri), SourceResult.cancelled() or SourceResult.failed(message).
        """
        pass
