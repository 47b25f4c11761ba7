""" Module for matching chords by a prefix of the remaining target text. """

from typing import Dict, Generic, List, Sequence, TypeVar

from . import ChordOutput
from .chords import ChordEnumerator

E = TypeVar("E")  # Trie element type.
V = TypeVar("V")  # Trie value type.

ChordMatches = List[ChordOutput]  # Matching chords ordered from longest output to shortest.


class PrefixChordMatcher:
    """ Enumerates the entire chord space on every call. No index is kept; this is simple and
        fast enough for ordinary chord systems, but costs a full enumeration per distinct suffix. """

    def __init__(self, enumerator:ChordEnumerator) -> None:
        self._enumerator = enumerator  # Restartable source of all chords.
        self.call_count = 0            # Number of match calls made so far, for instrumentation.

    def match(self, target:str) -> ChordMatches:
        """ Return every chord with a non-empty output that <target> starts with.
            The sort is stable, so equal-length outputs stay in enumeration order. """
        self.call_count += 1
        matches = [(out, stroke) for out, stroke in self._enumerator if out and target.startswith(out)]
        matches.sort(key=lambda m: -len(m[0]))
        return matches


class PrefixTree(Generic[E, V]):
    """ A trie with sequence-based keys that quickly returns all values whose key is a prefix of a given sequence.
        Duplicate keys are allowed; all of their values are kept in insertion order. """

    def __init__(self) -> None:
        """ The root node matches the empty sequence, which is a prefix of everything. """
        self._root = {"values": []}

    def add(self, k:Sequence[E], v:V) -> None:
        """ Add a new value to the list for sequence <k>. If it doesn't exist, create nodes until we reach it. """
        node = self._root
        for element in k:
            if element not in node:
                node[element] = {"values": []}
            node = node[element]
        node["values"].append(v)

    def match(self, k:Sequence[E], *, include_empty=False) -> List[V]:
        """ For a sequence <k>, return all of the values that match any prefix in order
            from longest prefix matched to shortest. Values under the empty key are only
            included if <include_empty> is True. """
        node = self._root
        values = node["values"][:] if include_empty else []
        for element in k:
            if element not in node:
                break
            node = node[element]
            values = node["values"] + values
        return values


class IndexedPrefixMatcher(PrefixChordMatcher):
    """ Enumerates the chord space once and indexes every output by character.
        Results are identical to the unindexed matcher, but each call only walks the target. """

    def __init__(self, enumerator:ChordEnumerator) -> None:
        super().__init__(enumerator)
        self._tree = PrefixTree()
        for out, stroke in enumerator:
            self._tree.add(out, (out, stroke))

    def match(self, target:str) -> ChordMatches:
        self.call_count += 1
        return self._tree.match(target)


# Matcher classes selectable by name.
MATCHER_TYPES: Dict[str, type] = {"simple": PrefixChordMatcher, "indexed": IndexedPrefixMatcher}
