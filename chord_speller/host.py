""" Helpers for host applications that feed requests to a scheduler and consume its messages. """

import re
from typing import Dict, List, Optional

from chord_speller.messages import JSONStruct

_LEADING_INT = re.compile(r"[+-]?[0-9]+")  # Optionally signed decimal digits at the start of user input.


def normalize_target(s:str) -> str:
    """ Targets are matched exactly, so hosts should trim and case-fold user input first. """
    return s.strip().lower()


def parse_max_entries(raw:str) -> Optional[int]:
    """ Parse a user-entered cap. Blank input means unlimited. Otherwise the leading integer is used,
        ignoring anything after it ("2.5" is 2, "3abc" is 3), and the result is at least 1.
        Input that does not start with an integer counts as 0. """
    raw = raw.strip()
    if not raw:
        return None
    match = _LEADING_INT.match(raw)
    n = int(match.group()) if match else 0
    return max(1, n)


class MessageCollector:
    """ Scheduler message callback that keeps every message, grouped by job ID. """

    def __init__(self) -> None:
        self.messages: List[JSONStruct] = []  # Every message in order of arrival.

    def __call__(self, msg:JSONStruct) -> None:
        self.messages.append(msg)

    def for_id(self, job_id:int) -> List[JSONStruct]:
        return [msg for msg in self.messages if msg.id == job_id]

    def by_type(self, job_id:int) -> Dict[str, List[JSONStruct]]:
        d = {}
        for msg in self.for_id(job_id):
            d.setdefault(msg.type, []).append(msg)
        return d

    def spellings(self, job_id:int) -> List[str]:
        """ Return the display strings of every chunk sent for <job_id> in order. """
        return [s for msg in self.for_id(job_id) if msg.type == "chunk" for s in msg.spellings]

    def strokes(self, job_id:int) -> List[list]:
        return [s for msg in self.for_id(job_id) if msg.type == "chunk" for s in msg.strokes]

    def clear(self) -> None:
        self.messages.clear()
