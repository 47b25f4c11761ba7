import sys
from threading import Lock
from time import strftime
from typing import TextIO


class StreamLogger:
    """ Writes status lines to pre-opened text streams. The worker thread and the event loop thread
        may both log, so every write holds a lock. """

    def __init__(self, *streams:TextIO, time_fmt="[%b %d %Y %H:%M:%S]: ", repeat_mark="*") -> None:
        self._streams = streams          # One or more writable/appendable text streams for logging.
        self._time_fmt = time_fmt        # Format for timestamps using time.strftime. If None, do not add timestamps.
        self._repeat_mark = repeat_mark  # Mark to replace repeated messages. If None, log all messages fully.
        self._last_message = ""          # Most recent unique message string.
        self._lock = Lock()

    def log(self, message:str) -> None:
        """ Collapse repeats, timestamp, and write <message> to all log streams with a trailing newline. """
        with self._lock:
            if self._repeat_mark is not None:
                if message == self._last_message:
                    message = self._repeat_mark
                else:
                    self._last_message = message
            if self._time_fmt is not None:
                message = strftime(self._time_fmt) + message
            for stream in self._streams:
                try:
                    # Flush after every write so that messages don't get lost in the buffer on a crash.
                    stream.write(message + '\n')
                    stream.flush()
                except (OSError, ValueError):
                    # A closed or broken stream must not stop the others.
                    continue


def open_logger(*filenames:str, encoding='utf-8', to_stdout=False, to_stderr=False, **kwargs) -> StreamLogger:
    """ Open a logger that appends to text files and/or prints to system streams.
        Log files will remain open until the program is closed. """
    streams = [open(f, 'a', encoding=encoding) for f in filenames]
    if to_stdout:
        streams.append(sys.stdout)
    if to_stderr:
        streams.append(sys.stderr)
    return StreamLogger(*streams, **kwargs)
