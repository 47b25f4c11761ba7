""" Package for the spelling engine. A target word is spelled by finding every sequence of chords whose
    text outputs concatenate to exactly that word. The pieces, in order of dependency:

    chords - Every combination of one initial, vowel, final, and suffix candidate is a chord.
    prefix - For some remaining text, find the chords whose output it starts with, longest first.
    search - Recursively decompose the target into chords, memoizing the spellings of each suffix.
    display - Render spellings into human-readable strings. """

from typing import Tuple

Stroke = Tuple[str, str, str, str]  # Raw chord identifiers: (initial, vowel, final, suffix).
ChordOutput = Tuple[str, Stroke]    # A chord's concatenated literal text paired with its stroke.
Spelling = Tuple[ChordOutput, ...]  # Chords applied left-to-right whose outputs concatenate to a target.
