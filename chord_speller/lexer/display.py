""" Module for rendering spellings as text. """

from typing import List

from . import Spelling, Stroke

FINAL_MARKER = "-"       # Leading character on final identifiers that separates them from initials.
VARIANT_SEP = "|"        # Separates alternatives inside one identifier.
VARIANT_DISPLAY = "&"    # Display-safe replacement for the variant separator.
EMPTY_CHORD = "∅"        # Shown in place of a chord with no identifiers at all.
CHORD_SEP = " / "        # Shown between chords in a spelling.


def chord_repr(stroke:Stroke) -> str:
    """ Join the four identifiers of a chord. The final marker is only kept when nothing precedes the final,
        since it is then the only sign that the keys belong to the final and not the initial. """
    initial, vowel, final, suffix = stroke
    if final.startswith(FINAL_MARKER) and (initial or vowel):
        final = final[len(FINAL_MARKER):]
    raw = initial + vowel + final + suffix
    return (raw or EMPTY_CHORD).replace(VARIANT_SEP, VARIANT_DISPLAY)


def spelling_repr(spelling:Spelling) -> str:
    return CHORD_SEP.join([chord_repr(stroke) for _, stroke in spelling])


def spelling_strokes(spelling:Spelling) -> List[List[str]]:
    """ Return the strokes of a spelling as JSON-compatible lists. """
    return [list(stroke) for _, stroke in spelling]


def spelling_text(spelling:Spelling) -> str:
    """ Return the concatenated text output of a spelling. """
    return "".join([out for out, _ in spelling])

