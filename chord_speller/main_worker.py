""" Main module for running the scheduler as a line-delimited JSON worker over standard streams. """

import asyncio
import json
import sys
from threading import Thread
from typing import Callable, TextIO

from chord_speller import ChordSpeller, SpellerOptions
from chord_speller.messages import ComputeRequest, ErrorMessage, JSONStruct


class JSONLineWriter:
    """ Writes each message as one line of JSON and flushes it immediately. """

    def __init__(self, stream:TextIO) -> None:
        self._stream = stream

    def __call__(self, msg:JSONStruct) -> None:
        self._stream.write(json.dumps(msg, ensure_ascii=False) + "\n")
        self._stream.flush()


class JSONLineReader:
    """ Reads requests from a text stream on its own thread and hands them to the event loop.
        The event loop is never blocked by input; the scheduler only sees requests between batches. """

    def __init__(self, stream:TextIO, loop:asyncio.AbstractEventLoop, submit:Callable[[ComputeRequest], None],
                 send:Callable[[JSONStruct], None], on_eof:Callable[[], None]) -> None:
        self._stream = stream  # Input text stream with one JSON object per line.
        self._loop = loop      # Event loop that owns the scheduler.
        self._submit = submit  # Scheduler submit method. Only called on the loop thread.
        self._send = send      # Message writer for malformed requests. Only called on the loop thread.
        self._on_eof = on_eof  # Called on the loop thread once input ends.

    def start(self) -> None:
        Thread(target=self._read, daemon=True).start()

    def _read(self) -> None:
        for line in self._stream:
            if line.strip():
                self._loop.call_soon_threadsafe(self.process, line)
        self._loop.call_soon_threadsafe(self._on_eof)

    def process(self, line:str) -> None:
        """ Decode one request line. Only "compute" requests are handled. Bad input is reported, never raised. """
        obj = None
        try:
            obj = json.loads(line)
            if isinstance(obj, dict) and obj.get("type", "compute") != "compute":
                return
            request = ComputeRequest.from_json(obj)
        except (TypeError, ValueError) as e:
            job_id = obj.get("id") if isinstance(obj, dict) else None
            self._send(ErrorMessage(id=job_id, message=f"Invalid request: {e}"))
            return
        self._submit(request)


async def serve(speller:ChordSpeller, stdin:TextIO, stdout:TextIO) -> None:
    """ Answer requests until input ends and the last job is finished. """
    loop = asyncio.get_running_loop()
    send = JSONLineWriter(stdout)
    scheduler = speller.scheduler(send)
    eof = asyncio.Event()
    reader = JSONLineReader(stdin, loop, scheduler.submit, send, eof.set)
    reader.start()
    await eof.wait()
    await scheduler.join()


def main() -> int:
    """ Standard output carries messages, so status goes to the log file and standard error. """
    opts = SpellerOptions("Answer JSON spelling requests from stdin with JSON messages on stdout.")
    speller = ChordSpeller(opts, log_to_stderr=True)
    speller.log("Worker started.")
    try:
        asyncio.run(serve(speller, sys.stdin, sys.stdout))
    except ValueError as e:
        speller.log(f"Worker could not start: {e}")
        return -1
    speller.log("Worker stopped.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
