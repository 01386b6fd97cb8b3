import logging
from typing import Callable
from ..domain.interfaces import IPermissionGate

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


class StaticPermissionGate(IPermissionGate):
    """Answers with a fixed decision (configuration or tests)."""

    def __init__(self, granted: bool):
        self.granted = granted

    def ensure_write_permission(self) -> bool:
        return self.granted


class PromptPermissionGate(IPermissionGate):
    """
    Asks the user on the terminal.
    A denial is remembered for the rest of the session, a grant is asked again each call.
    """

    def __init__(self, input_fn: Callable[[str], str] = input):
        self.input_fn = input_fn
        self._denied = False

    def ensure_write_permission(self) -> bool:
        if self._denied:
            return False

        try:
            answer = self.input_fn("Save the result to the media library? [y/N] ")
        except EOFError:
            answer = ""

        granted = answer.strip().lower() in _YES
        if not granted:
            logger.info("Media library write permission denied for this session")
            self._denied = True
        return granted


def build_permission_gate(mode: str) -> IPermissionGate:
    """Maps the LIBRARY_PERMISSION setting (granted | denied | prompt) to a gate."""
    mode = (mode or "").strip().lower()
    if mode == "granted":
        return StaticPermissionGate(True)
    if mode == "denied":
        return StaticPermissionGate(False)
    if mode == "prompt":
        return PromptPermissionGate()
    raise ValueError(f"Unknown library permission mode: {mode!r}")
