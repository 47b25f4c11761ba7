from typing import Callable

from chord_speller.lexer.prefix import MATCHER_TYPES
from chord_speller.options import SpellerOptions
from chord_speller.resource.cache import ComponentTableCache
from chord_speller.resource.io import ChordTableIO
from chord_speller.scheduler import MessageSender, SpellingScheduler
from chord_speller.util.exception import ExceptionLogger
from chord_speller.util.log import open_logger, StreamLogger


class ChordSpeller:
    """ Container/factory for all common components, and the basis for using the speller as a library. """

    def __init__(self, opts:SpellerOptions=None, *, parse_args=True, log_to_stderr=False) -> None:
        """ Start with the bare minimum of components and create the rest on demand.
            Hosts that use stdout for data should send log messages to stderr instead. """
        if opts is None:
            opts = SpellerOptions()
        if parse_args:
            opts.parse()
        self._opts = opts
        self._log_to_stderr = log_to_stderr

    class Component:
        """ Property-like descriptor to create a component if it does not exist, then save it over the attribute. """

        def __init__(self, func) -> None:
            self._func = func

        def __get__(self, instance, owner=None) -> object:
            value = self._func(instance)
            setattr(instance, self._func.__name__, value)
            return value

    @Component
    def logger(self) -> StreamLogger:
        """ Open a thread-safe logger that writes to a log file and one of the standard streams. """
        log_path = self._opts.log_path()
        return open_logger(log_path, to_stdout=not self._log_to_stderr, to_stderr=self._log_to_stderr)

    @Component
    def log(self) -> Callable[[str], None]:
        return self.logger.log

    @Component
    def table_io(self) -> ChordTableIO:
        """ Build the loader for chord tables, which may be local files or on a web server. """
        return ChordTableIO(self._opts.tables_path(), self._opts.table_fmt)

    @Component
    def tables(self) -> ComponentTableCache:
        """ The table cache is shared by every scheduler this object creates. """
        return ComponentTableCache(self.table_io, self.log)

    def scheduler(self, send:MessageSender) -> SpellingScheduler:
        """ Build a new scheduler that reports to <send>. It must be created and used on one event loop.
            Raises ValueError if the matcher type or batch size options are invalid. """
        opts = self._opts
        matcher_type = MATCHER_TYPES.get(opts.matcher)
        if matcher_type is None:
            raise ValueError(f'Unknown matcher type "{opts.matcher}". Choose from: {", ".join(MATCHER_TYPES)}.')
        return SpellingScheduler(self.tables, send, batch_size=opts.batch_size, matcher_type=matcher_type,
                                 log=self.log, log_exception=ExceptionLogger(self.log))
