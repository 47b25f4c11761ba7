""" Profilers for benchmark callables. Each keeps the result of every run and reports the fastest. """

from cProfile import Profile
from io import StringIO
import pstats
import time


class RawProfiler:
    """ Records total wall-clock time only. """

    def __init__(self) -> None:
        self._times = []  # Seconds taken by each call to run().

    def run(self, func, *args) -> None:
        start_time = time.perf_counter()
        func(*args)
        self._times.append(time.perf_counter() - start_time)

    def format_best(self) -> str:
        return f'Total time = {min(self._times):.3f}s\n'


class DetailedProfiler:
    """ Records cumulative time for every function called under cProfile.
        The search recurses through many small calls, so profiling overhead is substantial. """

    def __init__(self, *, max_lines=40, path_levels=2) -> None:
        self._runs = []                  # Profile objects, one per call to run().
        self._max_lines = max_lines      # Maximum number of functions listed.
        self._path_levels = path_levels  # Trailing directory levels kept in each file path (0 keeps all).

    def run(self, func, *args) -> None:
        pr = Profile()
        pr.enable()
        func(*args)
        pr.disable()
        pr.create_stats()
        self._runs.append(pr)

    def _short_path(self, path:str) -> str:
        if self._path_levels:
            for sep in ('\\', '/'):
                if sep in path:
                    return sep.join(path.rsplit(sep, self._path_levels)[1:])
        return path

    def format_best(self) -> str:
        """ Format one line per function for the run with the shortest cumulative time. """
        best = min(self._runs, key=lambda pr: max(s[3] for s in pr.stats.values()))
        buf = StringIO()
        pstats.Stats(best, stream=buf).sort_stats('cumulative').print_stats(self._max_lines)
        lines = []
        for line in buf.getvalue().splitlines()[4:]:
            fields = line.split(maxsplit=5)
            if len(fields) < 6:
                continue
            ncalls, _, _, cumtime, _, path = fields
            lines.append(f'{ncalls:>12}   {cumtime:>7}   {self._short_path(path)}')
        return '\n'.join(lines) + '\n'
