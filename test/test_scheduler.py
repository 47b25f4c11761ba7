""" Tests for running spelling jobs on the scheduler, including batching, caps, supersession and failures. """

import asyncio
import json
import sys

import pytest

from chord_speller.host import MessageCollector
from chord_speller.messages import ComputeRequest
from chord_speller.resource.cache import ComponentTableCache
from chord_speller.resource.io import ChordTableIO, ResourceIOError
from chord_speller.scheduler import JobState, SpellingScheduler
from chord_speller.util.exception import ExceptionLogger

from . import TEST_TABLES

TEN_A = "a" * 10  # Has 89 spellings with the "repeat" table.


def _request(job_id:int, version:str, target:str, max_entries:int=None) -> ComputeRequest:
    return ComputeRequest(id=job_id, version=version, target=target, maxEntries=max_entries)


def _cache(io=None) -> ComponentTableCache:
    """ Build a cache with every test table already present. Nothing should need to be loaded. """
    cache = ComponentTableCache(io or ChordTableIO("/nonexistent"))
    for name, data in TEST_TABLES.items():
        cache.add(name, data)
    return cache


def _run(*requests:ComputeRequest, cache:ComponentTableCache=None, **kwargs) -> MessageCollector:
    """ Submit all <requests> at once and wait for the scheduler to go idle. """
    async def run() -> MessageCollector:
        collector = MessageCollector()
        scheduler = SpellingScheduler(cache or _cache(), collector, **kwargs)
        for request in requests:
            scheduler.submit(request)
        await scheduler.join()
        assert scheduler.running is None
        assert scheduler.pending is None
        return collector
    return asyncio.run(run())


def _chunk_sizes(collector:MessageCollector, job_id:int) -> list:
    return [len(msg.spellings) for msg in collector.for_id(job_id) if msg.type == "chunk"]


def _total(collector:MessageCollector, job_id:int) -> int:
    [done] = collector.by_type(job_id)["resultDone"]
    return done.total


def test_single_job() -> None:
    collector = _run(_request(1, "ta", "ta"))
    chunk, done = collector.messages
    assert chunk == {"type": "chunk", "id": 1,
                     "spellings": ["TA", "T / A"],
                     "strokes": [[["T", "A", "", ""]], [["T", "", "", ""], ["", "A", "", ""]]]}
    assert done == {"type": "resultDone", "id": 1, "total": 2}
    # Every message must survive a trip through JSON unchanged.
    for msg in collector.messages:
        assert json.loads(json.dumps(msg)) == msg


def test_empty_target() -> None:
    """ The empty target has one spelling with no chords. """
    collector = _run(_request(1, "ta", ""))
    assert collector.spellings(1) == [""]
    assert collector.strokes(1) == [[]]
    assert _total(collector, 1) == 1


def test_no_solution() -> None:
    """ An unspellable target is a normal completion with a total of zero. """
    collector = _run(_request(1, "ta", "tb"))
    assert [msg.type for msg in collector.messages] == ["resultDone"]
    assert _total(collector, 1) == 0


def test_batches() -> None:
    """ Chunks hold exactly one batch each. Order matches the search order. """
    collector = _run(_request(1, "repeat", TEN_A))
    assert _chunk_sizes(collector, 1) == [5] * 17 + [4]
    assert _total(collector, 1) == 89
    full = collector.spellings(1)
    assert full[0] == "AA / AA / AA / AA / AA"
    assert full[-1] == " / ".join(["A"] * 10)
    collector = _run(_request(1, "repeat", TEN_A), batch_size=7)
    assert _chunk_sizes(collector, 1) == [7] * 12 + [5]
    assert collector.spellings(1) == full


def test_max_entries() -> None:
    """ The cap is respected exactly, and capped results are a prefix of the full results. """
    full = _run(_request(1, "repeat", TEN_A)).spellings(1)
    for cap, sizes in [(1, [1]), (7, [5, 2]), (10, [5, 5]), (89, [5] * 17 + [4])]:
        collector = _run(_request(1, "repeat", TEN_A, cap))
        assert _chunk_sizes(collector, 1) == sizes
        assert _total(collector, 1) == cap
        assert collector.spellings(1) == full[:cap]
    collector = _run(_request(1, "repeat", TEN_A, 1000))
    assert _total(collector, 1) == 89


def test_rapid_requests() -> None:
    """ Requests that arrive together all supersede each other; only the last one produces anything. """
    collector = _run(_request(1, "repeat", TEN_A), _request(2, "repeat", "aaa"), _request(3, "ta", "ta"))
    assert collector.for_id(1) == []
    assert collector.for_id(2) == []
    assert _total(collector, 3) == 2


def _run_superseding(*later:ComputeRequest, log:list=None) -> MessageCollector:
    """ Start a long job, and submit <later> requests as soon as its first chunk is sent. """
    async def run() -> MessageCollector:
        collector = MessageCollector()
        def send(msg) -> None:
            collector(msg)
            if msg.id == 1 and msg.type == "chunk" and len(collector.for_id(1)) == 1:
                for request in later:
                    scheduler.submit(request)
        scheduler = SpellingScheduler(_cache(), send, log=log.append if log is not None else None)
        scheduler.submit(_request(1, "repeat", TEN_A))
        assert scheduler.running.state is JobState.RUNNING
        await scheduler.join()
        return collector
    return asyncio.run(run())


def test_supersede() -> None:
    """ A superseded job sends nothing after the point of supersession, and the new job finishes. """
    collector = _run_superseding(_request(2, "ta", "ta"))
    [chunk] = collector.for_id(1)
    assert chunk.type == "chunk"
    assert chunk.spellings == _run(_request(1, "repeat", TEN_A)).spellings(1)[:5]
    assert [msg.type for msg in collector.for_id(2)] == ["chunk", "resultDone"]
    assert _total(collector, 2) == 2


def test_supersede_same_target() -> None:
    """ Re-requesting the same target under a new ID starts over from the beginning. """
    collector = _run_superseding(_request(2, "repeat", TEN_A))
    assert len(collector.for_id(1)) == 1
    assert _total(collector, 2) == 89


def test_pending_replaced() -> None:
    """ Only one request waits. A newer one replaces it before it ever starts. """
    collector = _run_superseding(_request(2, "repeat", "aaa"), _request(3, "ta", "ta"))
    assert len(collector.for_id(1)) == 1
    assert collector.for_id(2) == []
    assert _total(collector, 3) == 2


def test_same_id_resubmitted() -> None:
    """ Repeating the ID of the running job neither restarts it nor queues a second result stream. """
    log = []
    collector = _run_superseding(_request(1, "repeat", TEN_A), log=log)
    assert collector.by_type(1)["resultDone"] == [{"type": "resultDone", "id": 1, "total": 89}]
    assert collector.spellings(1) == _run(_request(1, "repeat", TEN_A)).spellings(1)
    assert "Job 1 is already running. Duplicate request ignored." in log


def test_same_id_after_new_request() -> None:
    """ Going back to the running ID before the newer request starts drops the newer request. """
    collector = _run_superseding(_request(2, "ta", "ta"), _request(1, "repeat", TEN_A))
    assert collector.for_id(2) == []
    assert _total(collector, 1) == 89
    assert len(collector.by_type(1)["resultDone"]) == 1


class _GatedIO:
    """ Table loader that blocks until the test opens the gate. The gate belongs to the running event loop. """

    def __init__(self, error:Exception=None) -> None:
        self.gate = None
        self.loaded = []
        self._error = error

    async def load(self, version:str):
        await self.gate.wait()
        if self._error is not None:
            raise self._error
        self.loaded.append(version)
        return TEST_TABLES["repeat"]


def _run_gated(io:_GatedIO, log:list=None) -> MessageCollector:
    """ Job 1 needs a table that is still loading when job 2 arrives. """
    async def run() -> MessageCollector:
        io.gate = asyncio.Event()
        collector = MessageCollector()
        cache = _cache(io)
        scheduler = SpellingScheduler(cache, collector, log=log.append if log is not None else None)
        scheduler.submit(_request(1, "slow", TEN_A))
        await asyncio.sleep(0)
        # Loading counts as running. The second job has to wait.
        scheduler.submit(_request(2, "ta", "ta"))
        assert scheduler.running.request.id == 1
        assert scheduler.pending.request.id == 2
        io.gate.set()
        await scheduler.join()
        return collector
    return asyncio.run(run())


def test_supersede_during_load() -> None:
    io = _GatedIO()
    collector = _run_gated(io)
    assert io.loaded == ["slow"]
    assert collector.for_id(1) == []
    assert _total(collector, 2) == 2


def test_superseded_load_failure() -> None:
    """ A job that fails after it was superseded does not report its error. """
    log = []
    collector = _run_gated(_GatedIO(ResourceIOError("Failed to load slow.")), log)
    assert collector.for_id(1) == []
    assert _total(collector, 2) == 2
    assert "Job 1 superseded: 0 spellings sent." in log
    assert not [line for line in log if "failed" in line]


def test_load_failure(tmp_path) -> None:
    """ A missing table is reported once, is not cached, and may succeed on a later request. """
    async def run() -> MessageCollector:
        collector = MessageCollector()
        cache = ComponentTableCache(ChordTableIO(str(tmp_path)))
        scheduler = SpellingScheduler(cache, collector)
        scheduler.submit(_request(1, "later", "ta"))
        await scheduler.join()
        assert "later" not in cache
        with open(tmp_path / "pinchord-chords-later.json", "w", encoding="utf-8") as fp:
            json.dump({"initials": {"T": "t"}, "vowels": {"A": "a"}}, fp)
        scheduler.submit(_request(2, "later", "ta"))
        await scheduler.join()
        assert "later" in cache
        return collector
    collector = asyncio.run(run())
    [error] = collector.for_id(1)
    assert error.type == "error"
    assert error.message.startswith("Failed to load later:")
    assert _total(collector, 2) == 2


class _BrokenMatcher:

    def __init__(self, enumerator) -> None:
        pass

    def match(self, target:str) -> list:
        raise RuntimeError("matcher broke")


def test_search_failure() -> None:
    """ Unexpected errors during a search become one error message and a logged traceback. """
    lines = []
    collector = _run(_request(1, "ta", "ta"), matcher_type=_BrokenMatcher,
                     log_exception=ExceptionLogger(lines.append))
    assert collector.messages == [{"type": "error", "id": 1, "message": "matcher broke"}]
    assert "RuntimeError: matcher broke" in lines[0]
    # The scheduler is still usable afterward.
    assert _total(_run(_request(2, "ta", "ta")), 2) == 2


def test_long_target() -> None:
    """ A target spelled with thousands of chords completes normally. """
    n = sys.getrecursionlimit() * 3
    collector = _run(_request(1, "ta", "t" * n))
    [strokes] = collector.strokes(1)
    assert len(strokes) == n
    assert _total(collector, 1) == 1


def test_batch_size_must_be_positive() -> None:
    for size in (0, -1):
        with pytest.raises(ValueError):
            SpellingScheduler(_cache(), MessageCollector(), batch_size=size)
