""" Module for enumerating every chord of a chord system. """

from typing import Iterator

from chord_speller.resource.components import Components

from . import ChordOutput

# Characters that mark a fragment as a template whose text is not statically known.
TEMPLATE_MARKERS = "{}|"


def is_literal(s:str) -> bool:
    """ Return True if <s> has no template markers. Its text can then be used directly. """
    return not any(c in s for c in TEMPLATE_MARKERS)


def literal_part(s:str) -> str:
    """ Non-literal fragments still match structurally, but contribute no text. """
    return s if is_literal(s) else ""


class ChordEnumerator:
    """ Lazily produces every chord as (output, stroke) by strict nested iteration over the candidate lists.
        There is no hidden state; each iteration starts over. This order is the tie-breaker for all searches. """

    def __init__(self, components:Components) -> None:
        self._components = components  # Candidate lists: [initials, vowels, finals, suffixes].

    def __iter__(self) -> Iterator[ChordOutput]:
        initials, vowels, finals, suffixes = self._components
        for i_stroke, i_text in initials:
            i_text = literal_part(i_text)
            for v_stroke, v_text in vowels:
                iv_text = i_text + literal_part(v_text)
                for f_stroke, f_text in finals:
                    ivf_text = iv_text + literal_part(f_text)
                    for s_stroke, s_text in suffixes:
                        yield ivf_text + literal_part(s_text), (i_stroke, v_stroke, f_stroke, s_stroke)

    def __len__(self) -> int:
        n = 1
        for candidates in self._components:
            n *= len(candidates)
        return n
