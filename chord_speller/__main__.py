#!/usr/bin/env python3

""" Master console script and primary entry point for the chord speller. """

import sys

from chord_speller.util.entrypoints import EntryPoint, EntryPointSelector

ENTRY_POINTS = {
    "lookup": EntryPoint("chord_speller.main_lookup", "main", "Print every chord spelling of some words (default)."),
    "worker": EntryPoint("chord_speller.main_worker", "main", "Answer JSON spelling requests over stdin/stdout.")
}


def main() -> int:
    loader = EntryPointSelector(ENTRY_POINTS, default_mode="lookup")
    return loader.main()


if __name__ == '__main__':
    sys.exit(main())
