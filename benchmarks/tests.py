""" Benchmark setups for each speller component. Counts are tailored for a reasonable running time. """


# Setup functions for fixtures and test data. Some benchmarks count import time, so all imports are local.

DEMO_WORDS = ["that", "cats", "sheets", "hoots", "strings", "tea", "pots", "shed", "stresses", "theaters"]


def _components(version="demo"):
    import asyncio
    from chord_speller import SpellerOptions
    from chord_speller.resource.components import build_components
    from chord_speller.resource.io import ChordTableIO
    opts = SpellerOptions()
    table_io = ChordTableIO(opts.tables_path(), opts.table_fmt)
    return build_components(asyncio.run(table_io.load(version)))


def _words(n:int) -> list:
    """ Cycle through the demo words with a fixed seed so runs are comparable. """
    from random import Random
    rnd = Random(n)
    return [rnd.choice(DEMO_WORDS) for _ in range(n)]


def _search_fn(matcher_name:str, n:int):
    from chord_speller.lexer.chords import ChordEnumerator
    from chord_speller.lexer.prefix import MATCHER_TYPES
    from chord_speller.lexer.search import SpellingSearch
    enumerator = ChordEnumerator(_components())
    words = _words(n)
    def run() -> None:
        for w in words:
            search = SpellingSearch(MATCHER_TYPES[matcher_name](enumerator).match)
            for _ in search.spellings(w):
                pass
    return run


# Main benchmark functions. Each returns a no-arg callable suitable for profiling a particular component.

def app_start():
    def run() -> None:
        from chord_speller import ChordSpeller
        ChordSpeller(parse_args=False).scheduler(lambda msg: None)
    return run


def enumerate_chords(n=100):
    from chord_speller.lexer.chords import ChordEnumerator
    enumerator = ChordEnumerator(_components())
    def run() -> None:
        for _ in range(n):
            for _ in enumerator:
                pass
    return run


def search(n=200):
    return _search_fn("simple", n)


def search_indexed(n=200):
    return _search_fn("indexed", n)


def scheduler(n=200):
    """ Full jobs through the scheduler, including display formatting and batch pauses. """
    import asyncio
    from chord_speller import ChordSpeller, SpellerOptions
    from chord_speller.messages import ComputeRequest
    opts = SpellerOptions()
    opts.parse(["bench", "--log=" + opts.USER_PATH_PREFIX + "bench.log"])
    speller = ChordSpeller(opts, parse_args=False, log_to_stderr=True)
    words = _words(n)
    async def lookup_all() -> None:
        sched = speller.scheduler(lambda msg: None)
        for i, w in enumerate(words, 1):
            sched.submit(ComputeRequest(id=i, version="demo", target=w))
            await sched.join()
    def run() -> None:
        asyncio.run(lookup_all())
    return run
