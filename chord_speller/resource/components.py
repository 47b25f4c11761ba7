""" Defines the component tables of a chord system and normalizes them into ordered candidate lists. """

from typing import Dict, List, Mapping, Optional, Tuple

ComponentTable = Dict[str, str]         # Maps a chord identifier to the text fragment it produces.
Candidate = Tuple[str, str]             # One (identifier, fragment) entry drawn from a component table.
ComponentList = List[Candidate]         # Ordered candidates for one component role.
Components = List[ComponentList]        # Candidate lists for every role: [initials, vowels, finals, suffixes].

EMPTY_CANDIDATE = ("", "")  # Represents "no chord used for this component". Produces no text.

# Component roles in chord order. Every chord has exactly one candidate from each.
ROLES = ("initials", "vowels", "finals", "suffixes")


class ChordData:
    """ Raw component tables for one chord system version, as decoded from its JSON source.
        Suffixes have two legacy field names. The first one is authoritative unless it is missing or empty. """

    def __init__(self, initials:ComponentTable=None, vowels:ComponentTable=None, finals:ComponentTable=None,
                 suffix:ComponentTable=None, suffixes:ComponentTable=None, **_) -> None:
        self.initials = initials or {}
        self.vowels = vowels or {}
        self.finals = finals or {}
        self.suffixes = suffix or suffixes or {}

    @classmethod
    def from_json(cls, d:Mapping) -> "ChordData":
        """ Build from a decoded JSON object. Every present table must itself be an object. """
        for k in ("initials", "vowels", "finals", "suffix", "suffixes"):
            v = d.get(k)
            if v is not None and not isinstance(v, dict):
                raise TypeError(f'Field "{k}" must be an object mapping chord identifiers to text.')
        return cls(**d)


def with_empty(table:Optional[Mapping[str, str]]) -> ComponentList:
    """ Return the entries of <table> in insertion order, with the empty candidate at the front
        unless the table already maps the empty identifier to something. """
    items = list((table or {}).items())
    if not any(k == "" for k, _ in items):
        items.insert(0, EMPTY_CANDIDATE)
    return items


def build_components(data:ChordData) -> Components:
    """ Normalize all four component tables into ordered candidate lists. No input is an error. """
    return [with_empty(data.initials),
            with_empty(data.vowels),
            with_empty(data.finals),
            with_empty(data.suffixes)]
