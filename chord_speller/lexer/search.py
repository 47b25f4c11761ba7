""" Module for the spelling search engine. """

from typing import Callable, Dict, Iterator, List

from . import Spelling
from .prefix import ChordMatches

SpellingMemo = Dict[str, List[Spelling]]  # Every spelling of a remaining target suffix, keyed by that suffix.


class _SuffixFrame:
    """ One suffix under exploration: the chords left to try on it and every spelling of it found so far. """

    __slots__ = ["target", "matches", "chord", "ways"]

    def __init__(self, target:str, matches:ChordMatches) -> None:
        self.target = target          # Remaining text this frame spells.
        self.matches = iter(matches)  # Chords not yet tried, longest output first.
        self.chord = None             # Chord currently applied to the front of <target>.
        self.ways = []                # Spellings of <target> yielded so far, in order.


class SpellingSearch:
    """ Depth-first decomposition of a target into chords. Spellings are yielded as soon as they are found.

        A suffix of the target may be reached by many different chord paths, so the full list of spellings
        for each suffix is memoized after its first complete exploration and simply replayed afterward.
        An entry is only stored once its suffix is exhausted; a search abandoned partway never leaves a
        partial entry behind. The memo belongs to one lookup and must not be driven from two places at once.

        The chords in progress are kept on an explicit stack, so a target may be as long as memory allows
        regardless of how many chords it takes. """

    def __init__(self, match_prefix:Callable[[str], ChordMatches]) -> None:
        self._match_prefix = match_prefix  # Returns the chords matching a prefix of some text, longest first.

    def spellings(self, target:str, memo:SpellingMemo=None) -> Iterator[Spelling]:
        """ Yield every spelling of <target> in deterministic order. An empty target has exactly one
            spelling: the empty sequence. A target with no decomposition yields nothing. """
        if memo is None:
            memo = {}
        return self._search(target, memo)

    @staticmethod
    def _known(target:str, memo:SpellingMemo) -> bool:
        if not target:
            memo[""] = [()]
        return target in memo

    @staticmethod
    def _record(stack:List[_SuffixFrame], rest_way:Spelling) -> Spelling:
        """ Prefix a spelling of the deepest remainder with each frame's chord, innermost first,
            and save each partial result in its own frame. Return the spelling of the whole target. """
        way = rest_way
        for frame in reversed(stack):
            way = (frame.chord, *way)
            frame.ways.append(way)
        return way

    def _search(self, target:str, memo:SpellingMemo) -> Iterator[Spelling]:
        if self._known(target, memo):
            yield from memo[target]
            return
        stack = [_SuffixFrame(target, self._match_prefix(target))]
        while stack:
            frame = stack[-1]
            chord = next(frame.matches, None)
            if chord is None:
                stack.pop()
                memo[frame.target] = frame.ways
                continue
            frame.chord = chord
            rest = frame.target[len(chord[0]):]
            if self._known(rest, memo):
                for rest_way in memo[rest]:
                    yield self._record(stack, rest_way)
            else:
                stack.append(_SuffixFrame(rest, self._match_prefix(rest)))
