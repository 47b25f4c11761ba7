""" Package for the chord speller. Given the component tables of a chord system, it finds every way a word
    can be written as a sequence of chords. Each chord combines one candidate from each of four tables:

        initials - left-hand consonant keys, such as T for "t".
        vowels   - thumb keys for vowel sounds.
        finals   - right-hand keys, written with a leading hyphen to tell them apart from initials.
        suffixes - extra keys appended to the end of the chord.

    Any table may also be skipped by a chord. A table entry whose text contains template markers has no
    fixed text; it may still appear in a chord, but adds no letters to it.

    resource - Chord tables exist as one JSON file per version, either on disk or on a web server.
    Each version is loaded once, normalized into candidate lists, and cached for the life of the process.

    lexer - The spelling engine. It enumerates every chord, matches chord outputs against prefixes of the word
    (longest first), and searches depth-first for every full decomposition, memoizing suffixes as it goes.

    scheduler - Lookups run as jobs on an asyncio event loop. A job sends its results in small batches and
    pauses between them, so a newer request can supersede it at any batch boundary.

    speller - Contains the components and builds schedulers. Intended to be used directly as a library.

    __main__ - When chord_speller is run directly as a script, the first command-line argument will be used
    to choose one of the application entry points:

        lookup - Print spellings for words given on the command line (default).

        worker - Serve line-delimited JSON requests over standard streams, one job at a time. """

from chord_speller.options import SpellerOptions
from chord_speller.speller import ChordSpeller
