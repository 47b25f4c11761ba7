""" Tests for the command line, the host helpers and both application entry points. """

import asyncio
import io
import json
import sys

import pytest

from chord_speller import ChordSpeller, SpellerOptions
from chord_speller.__main__ import ENTRY_POINTS
from chord_speller.host import normalize_target, parse_max_entries
from chord_speller.main_lookup import format_result, lookup_all, main as lookup_main
from chord_speller.main_worker import serve
from chord_speller.messages import ChunkMessage, ComputeRequest, ErrorMessage, ResultDoneMessage
from chord_speller.util.entrypoints import EntryPointSelector

from . import DEMO_TABLE_DIR


def _speller(tmp_path, *args:str, log_to_stderr=False) -> ChordSpeller:
    opts = SpellerOptions()
    opts.parse(["test", f"--log={tmp_path / 'status.log'}", f"--tables={DEMO_TABLE_DIR}", *args])
    return ChordSpeller(opts, parse_args=False, log_to_stderr=log_to_stderr)


def test_options(capsys) -> None:
    opts = SpellerOptions("Test description.")
    opts.parse(["prog", "hello", "World", "--version=v2", "--batch-size=3", "--unknown", "x"])
    assert opts.args() == ["hello", "World", "--unknown", "x"]
    assert opts.version == "v2"
    assert opts.batch_size == 3
    assert opts.max_entries_limit() is None
    with pytest.raises(AttributeError):
        opts.not_an_option
    with pytest.raises(SystemExit):
        opts.parse(["prog", "--help"])
    out = capsys.readouterr().out
    assert out.startswith("Test description.\nusage: prog")
    assert "--max-entries" in out


def test_entry_points() -> None:
    selector = EntryPointSelector(ENTRY_POINTS, default_mode="lookup")
    assert selector.load("w") is ENTRY_POINTS["worker"]
    assert selector.load("") is ENTRY_POINTS["lookup"]
    assert selector.load("nothing")() == -1


def test_host_input() -> None:
    assert normalize_target("  Hello World\n") == "hello world"
    assert parse_max_entries("") is None
    assert parse_max_entries("   ") is None
    assert parse_max_entries("12") == 12
    assert parse_max_entries("0") == 1
    assert parse_max_entries("-4") == 1
    assert parse_max_entries("lots") == 1
    # Only the leading integer counts, as in a browser number field.
    assert parse_max_entries("2.5") == 2
    assert parse_max_entries("3abc") == 3
    assert parse_max_entries(" +4 ") == 4
    assert parse_max_entries("x5") == 1


def test_requests() -> None:
    req = ComputeRequest.from_json({"type": "compute", "id": 3, "version": "v", "target": "t", "extra": 1})
    assert req == {"type": "compute", "id": 3, "version": "v", "target": "t", "maxEntries": None}
    assert req.target == "t"
    for bad in [[], {"version": "v", "target": "t"}, {"id": "3", "version": "v", "target": "t"},
                {"id": True, "version": "v", "target": "t"}, {"id": 3, "version": 1, "target": "t"},
                {"id": 3, "version": "v", "target": "t", "maxEntries": 2.5}]:
        with pytest.raises(TypeError):
            ComputeRequest.from_json(bad)
    with pytest.raises(ValueError):
        ComputeRequest.from_json({"id": 3, "version": "v", "target": "t", "maxEntries": 0})


def test_format_result() -> None:
    """ Spellings are listed fewest chords first, keeping discovery order among equals. """
    messages = [ChunkMessage(id=1, spellings=["T / A", "TA"], strokes=[[["T", "", "", ""], ["", "A", "", ""]],
                                                                     [["T", "A", "", ""]]]),
                ChunkMessage(id=1, spellings=["K / A"], strokes=[[["K", "", "", ""], ["", "A", "", ""]]]),
                ResultDoneMessage(id=1, total=3)]
    assert format_result("ta", messages) == ["  [1] TA", "  [2] T / A", "  [2] K / A", "ta: 3 way(s)"]
    assert format_result("x", [ResultDoneMessage(id=2, total=0)]) == ['No chord spellings found for "x".']
    assert format_result("x", [ErrorMessage(id=3, message="oops")]) == ["x: Error: oops"]


def test_lookup(tmp_path, capsys) -> None:
    speller = _speller(tmp_path)
    failures = asyncio.run(lookup_all(speller, ["tea", "zzz", "that"], "demo", 2))
    assert failures == 0
    out = capsys.readouterr().out
    assert "tea: 2 way(s)" in out
    assert 'No chord spellings found for "zzz".' in out
    assert "  [1] THAT" in out
    failures = asyncio.run(lookup_all(speller, ["tea"], "missing"))
    assert failures == 1
    assert "tea: Error: Failed to load missing:" in capsys.readouterr().out


def test_worker(tmp_path) -> None:
    """ Each input line is a request. Bad lines become errors and unknown request types are ignored. """
    lines = [json.dumps({"type": "compute", "id": 1, "version": "demo", "target": "that", "maxEntries": 3}),
             "not json",
             json.dumps({"type": "ping", "id": 5}),
             json.dumps({"type": "compute", "id": 2, "version": "demo", "target": "tea", "maxEntries": 0}),
             ""]
    stdin = io.StringIO("\n".join(lines))
    stdout = io.StringIO()
    asyncio.run(serve(_speller(tmp_path, log_to_stderr=True), stdin, stdout))
    out = [json.loads(s) for s in stdout.getvalue().splitlines()]
    assert not [msg for msg in out if msg["id"] == 5]
    [bad_json] = [msg for msg in out if msg["id"] is None]
    assert bad_json["type"] == "error"
    assert bad_json["message"].startswith("Invalid request:")
    [bad_cap] = [msg for msg in out if msg["id"] == 2]
    assert bad_cap["type"] == "error"
    assert "maxEntries" in bad_cap["message"]
    job = [msg for msg in out if msg["id"] == 1]
    assert [msg["type"] for msg in job] == ["chunk", "resultDone"]
    assert len(job[0]["spellings"]) == len(job[0]["strokes"]) == 3
    assert job[0]["spellings"][0] == "THAT"
    assert job[1]["total"] == 3


@pytest.mark.parametrize("option", ["--batch-size=0", "--batch-size=-3", "--matcher=bogus"])
def test_invalid_scheduler_options(tmp_path, option) -> None:
    speller = _speller(tmp_path, option)
    with pytest.raises(ValueError):
        speller.scheduler(lambda msg: None)


def test_lookup_rejects_batch_size(tmp_path, monkeypatch, capsys) -> None:
    """ A bad option is reported as a message with an error code, not a traceback. """
    monkeypatch.setattr(sys, "argv", ["lookup", "cats", f"--log={tmp_path / 'status.log'}", "--batch-size=0"])
    assert lookup_main() == -1
    assert "Batch size must be at least 1, got 0." in capsys.readouterr().err
