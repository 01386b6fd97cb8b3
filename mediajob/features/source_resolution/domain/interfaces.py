from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Callable, Optional

# Opens a content reference (content://, http://, ...) as a readable binary stream.
# The returned object must be usable as a context manager.
ContentOpener = Callable[[str], BinaryIO]


class IPathResolver(ABC):
    """
    Contract for turning an opaque source reference into a locally readable path.
    """

    @abstractmethod
    def resolve(self, source_uri: Optional[str]) -> Path:
        """
        Resolves the reference, staging a local copy when it is not a plain path.

        Raises:
            ResolutionError: If the reference is empty or the copy fails.
        """
        pass
