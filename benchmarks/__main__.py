#!/usr/bin/env python3

""" Entry point for timing and profiling the chord speller components.

    python -m benchmarks [operation] [profiler] [count]

    With no profiler name, every profiler is run on the operation in its own subprocess. """

import subprocess
import sys

from benchmarks.profilers import DetailedProfiler, RawProfiler
from benchmarks import tests

PROFILERS = {cls.__name__: cls for cls in [RawProfiler, DetailedProfiler]}
OPERATIONS = ["app_start", "enumerate_chords", "search", "search_indexed", "scheduler"]
SECTION_DELIM = '-' * 78


def run_one(operation:str, pf_name:str, *args:str) -> str:
    """ Build the benchmark callable (untimed), then profile it. """
    setup = getattr(tests, operation)
    func = setup(*map(int, args))
    profiler = PROFILERS[pf_name]()
    profiler.run(func)
    return f'Benchmark for {operation} using {pf_name}:\n\n{profiler.format_best()}'


def main(script:str, operation="search", *argv:str) -> int:
    """ Imports are cached after the first run, so each profiler gets a fresh interpreter. """
    if operation not in OPERATIONS:
        print(f'Unknown operation "{operation}". Choose from: {", ".join(OPERATIONS)}', file=sys.stderr)
        return -1
    if argv and argv[0] in PROFILERS:
        print(run_one(operation, *argv), end='')
        return 0
    print()
    for name in PROFILERS:
        cmd = (sys.executable, '-m', 'benchmarks', operation, name, *argv)
        result = subprocess.run(cmd, capture_output=True, text=True)
        print(f'{SECTION_DELIM}\n')
        print(result.stderr if result.returncode else result.stdout)
    print(SECTION_DELIM)
    return 0


if __name__ == '__main__':
    sys.exit(main(*sys.argv))
