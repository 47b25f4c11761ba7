""" Module for running spelling lookups as cooperative jobs on an asyncio event loop. """

import asyncio
from enum import Enum
from itertools import islice
from typing import Callable, Optional

from chord_speller.lexer.chords import ChordEnumerator
from chord_speller.lexer.display import spelling_repr, spelling_strokes
from chord_speller.lexer.prefix import IndexedPrefixMatcher
from chord_speller.lexer.search import SpellingSearch
from chord_speller.messages import ChunkMessage, ComputeRequest, ErrorMessage, JSONStruct, ResultDoneMessage
from chord_speller.resource.cache import ComponentTableCache
from chord_speller.resource.components import Components

MessageSender = Callable[[JSONStruct], None]  # Receives every outgoing message in order.
LineLogger = Callable[[str], None]            # Line-based string callable used for log messages.

DEFAULT_BATCH_SIZE = 5


class JobState(Enum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    SUPERSEDED = "superseded"
    FAILED = "failed"


class Job:
    """ State of one request. Only the scheduler touches it. """

    def __init__(self, request:ComputeRequest) -> None:
        self.request = request
        self.state = JobState.QUEUED
        self.total = 0  # Number of spellings sent so far.

    def __repr__(self) -> str:
        return f'<Job {self.request.id} {self.state.value} ({self.total} sent)>'


class SpellingScheduler:
    """ Runs at most one spelling job at a time on the current event loop.

        A running job sends its spellings in fixed-size batches, suspending on a zero-delay sleep after each one
        so that new requests can arrive. A request with a new ID makes that ID current. On resumption, a job that
        is no longer current stops at once without sending anything else, and the newest request starts in its place.
        Only one request is kept waiting; a newer one replaces it. There is no explicit cancel; only supersession.

        Every method must be called from the event loop thread. Other threads should go through
        loop.call_soon_threadsafe(scheduler.submit, request). """

    def __init__(self, tables:ComponentTableCache, send:MessageSender, *, batch_size=DEFAULT_BATCH_SIZE,
                 matcher_type=IndexedPrefixMatcher, log:LineLogger=None,
                 log_exception:Callable[..., bool]=None) -> None:
        if batch_size < 1:
            raise ValueError(f'Batch size must be at least 1, got {batch_size}.')
        self._tables = tables                        # Chord tables by version (shared across jobs).
        self._send = send                            # Callback for outgoing messages.
        self._batch_size = batch_size                # Spellings found between each suspension.
        self._matcher_type = matcher_type            # Prefix matcher class built fresh for each job.
        self._log = log or (lambda _: None)          # Status message callable.
        self._log_exception = log_exception          # Optional traceback handler with the signature of __exit__.
        self._current_id = None                      # ID of the most recent request. All others are stale.
        self._running: Optional[Job] = None          # Job currently executing, if any.
        self._pending: Optional[Job] = None          # Job waiting for the running one to stop, if any.
        self._task = None                            # Task driving the running job. Kept so it is not collected.
        self._idle = asyncio.Event()                 # Set whenever nothing is running or pending.
        self._idle.set()

    @property
    def running(self) -> Optional[Job]:
        return self._running

    @property
    def pending(self) -> Optional[Job]:
        return self._pending

    def submit(self, request:ComputeRequest) -> None:
        """ Make <request> current. Start it now if the scheduler is free, otherwise queue it.
            A request repeating the ID of the running job makes that job current again and starts nothing.
            Each ID gets at most one result stream. """
        self._current_id = request.id
        running = self._running
        if running is not None and running.request.id == request.id:
            self._log(f"Job {request.id} is already running. Duplicate request ignored.")
            self._discard_pending()
            return
        if running is None:
            self._start(Job(request))
            return
        self._discard_pending()
        self._pending = Job(request)

    def _discard_pending(self) -> None:
        if self._pending is not None:
            self._log(f"Job {self._pending.request.id} discarded before starting.")
            self._pending.state = JobState.SUPERSEDED
            self._pending = None

    async def join(self) -> None:
        """ Wait until no job is running or pending. """
        await self._idle.wait()

    def _is_current(self, job:Job) -> bool:
        return job.request.id == self._current_id

    def _start(self, job:Job) -> None:
        job.state = JobState.RUNNING
        self._running = job
        self._idle.clear()
        self._log(f"Job {job.request.id} started: {job.request.target!r} ({job.request.version}).")
        self._task = asyncio.ensure_future(self._run(job))

    def _finish(self, job:Job) -> None:
        """ Release the finished job entirely, then start whatever request is waiting. """
        self._log(f"Job {job.request.id} {job.state.value}: {job.total} spellings sent.")
        self._running = None
        job, self._pending = self._pending, None
        if job is not None:
            self._start(job)
        else:
            self._idle.set()

    async def _run(self, job:Job) -> None:
        """ Job boundary. No exception may escape; failures become one error message. """
        request = job.request
        try:
            components = await self._tables.get(request.version)
            if not self._is_current(job):
                job.state = JobState.SUPERSEDED
                return
            await self._search(job, components)
        except Exception as exc:
            job.state = JobState.FAILED if self._is_current(job) else JobState.SUPERSEDED
            if self._log_exception is not None:
                self._log_exception(type(exc), exc, exc.__traceback__)
            if self._is_current(job):
                message = str(exc) or type(exc).__name__
                self._send(ErrorMessage(id=request.id, message=message))
        finally:
            self._finish(job)

    async def _search(self, job:Job, components:Components) -> None:
        """ Send spellings in batches until the search is exhausted, the cap is reached, or the job is superseded.
            The memo and generator state are local; nothing survives the job. """
        request = job.request
        max_entries = request.maxEntries
        matcher = self._matcher_type(ChordEnumerator(components))
        search = SpellingSearch(matcher.match)
        spellings = search.spellings(request.target, {})
        try:
            while True:
                count = self._batch_size
                if max_entries is not None:
                    count = min(count, max_entries - job.total)
                batch = list(islice(spellings, count))
                if batch and self._is_current(job):
                    job.total += len(batch)
                    self._send(ChunkMessage(id=request.id,
                                            spellings=[spelling_repr(s) for s in batch],
                                            strokes=[spelling_strokes(s) for s in batch]))
                if not self._is_current(job):
                    job.state = JobState.SUPERSEDED
                    return
                if len(batch) < count or job.total == max_entries:
                    job.state = JobState.COMPLETED
                    self._send(ResultDoneMessage(id=request.id, total=job.total))
                    return
                await asyncio.sleep(0)
                if not self._is_current(job):
                    job.state = JobState.SUPERSEDED
                    return
        finally:
            spellings.close()
