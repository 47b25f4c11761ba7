""" Main module for batch lookup of chord spellings from a terminal shell. """

import asyncio
import sys
from typing import List

from chord_speller import ChordSpeller, SpellerOptions
from chord_speller.host import MessageCollector, normalize_target
from chord_speller.messages import ComputeRequest, JSONStruct


def format_result(word:str, messages:List[JSONStruct]) -> List[str]:
    """ Format the messages for one word as output lines. Spellings are grouped by chord count,
        fewest chords first, and stay in order of discovery within each group. """
    lines = []
    rows = [(len(strokes), s) for msg in messages if msg.type == "chunk"
            for s, strokes in zip(msg.spellings, msg.strokes)]
    rows.sort(key=lambda r: r[0])
    for count, s in rows:
        lines.append(f"  [{count}] {s}")
    for msg in messages:
        if msg.type == "resultDone":
            if msg.total:
                lines.append(f"{word}: {msg.total} way(s)")
            else:
                lines.append(f'No chord spellings found for "{word}".')
        elif msg.type == "error":
            lines.append(f"{word}: Error: {msg.message}")
    return lines


async def lookup_all(speller:ChordSpeller, words:List[str], version:str, max_entries:int=None) -> int:
    """ Look up each word as its own job, strictly one after another. Return the number of failed jobs. """
    collector = MessageCollector()
    scheduler = speller.scheduler(collector)
    failures = 0
    for job_id, word in enumerate(words, 1):
        scheduler.submit(ComputeRequest(id=job_id, version=version, target=word, maxEntries=max_entries))
        await scheduler.join()
        messages = collector.for_id(job_id)
        failures += any(msg.type == "error" for msg in messages)
        print("\n".join(format_result(word, messages)))
    return failures


def main() -> int:
    """ Every positional argument is a word to spell. Blank words are skipped. """
    opts = SpellerOptions("Print every chord spelling of one or more words.")
    speller = ChordSpeller(opts)
    words = [w for w in map(normalize_target, opts.args()) if w]
    if not words:
        print("At least one word is required.", file=sys.stderr)
        return -1
    try:
        failures = asyncio.run(lookup_all(speller, words, opts.version, opts.max_entries_limit()))
    except ValueError as e:
        print(e, file=sys.stderr)
        return -1
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
