from typing import Callable
from ..domain.interfaces import ISourceSelector
from ..domain.models import SourceResult


class StaticSourceSelector(ISourceSelector):
    """Returns a reference known up front (e.g. a command line argument)."""

    def __init__(self, uri: str):
        self.uri = uri

    def pick_source(self) -> SourceResult:
        return SourceResult.picked(self.uri)


class PromptSourceSelector(ISourceSelector):
    """Reads a path or URI from the terminal. EOF or a blank line cancels."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        self.input_fn = input_fn

    def pick_source(self) -> SourceResult:
        try:
            answer = self.input_fn("Video path or URI: ")
        except EOFError:
            return SourceResult.cancelled()
        except OSError as e:
            return SourceResult.failed(f"Could not read source: {e}")

        if not answer.strip():
            return SourceResult.cancelled()
        return SourceResult.picked(answer.strip())
