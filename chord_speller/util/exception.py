from traceback import format_exception
from typing import Callable


class ExceptionLogger:
    """ Writes exception tracebacks to a line logger. Same signature as __exit__. """

    def __init__(self, logger:Callable[[str], None], *, max_frames=20) -> None:
        self._logger = logger          # String logger callable.
        self._max_frames = max_frames  # Maximum number of stack frames to write.

    def __call__(self, exc_type, exc_value, exc_tb) -> bool:
        """ Write the stack trace to the logger. This does *not* count as handling the exception. """
        tb_lines = format_exception(exc_type, exc_value, exc_tb, limit=self._max_frames)
        self._logger("".join(tb_lines).rstrip())
        return False
