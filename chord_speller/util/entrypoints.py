""" Module for dynamically importing program entry points. """

import sys
from typing import Callable, List, Mapping


def shift_argv() -> str:
    """ Return the first command-line argument after shifting its contents onto the script string.
        This has the effect of "consuming" it without affecting how the command line appears in help. """
    if len(sys.argv) < 2:
        return ""
    script, head, *tail = sys.argv
    sys.argv = [script + " " + head, *tail]
    return head


class EntryPoint:
    """ Entry point for an application. Modules are imported as needed to avoid loading unnecessary dependencies. """

    def __init__(self, module_name:str, func_name:str, description="Unknown function.") -> None:
        self._module_name = module_name  # Full name of module to import.
        self._func_name = func_name      # Name of callable to execute in the module.
        self.description = description   # Textual description when the user looks for help.

    def __call__(self, *args, **kwargs) -> int:
        """ Import the module, call the named function, and return the result (usually an exit code). """
        module = __import__(self._module_name, fromlist=[self._func_name])
        func = getattr(module, self._func_name)
        return func(*args, **kwargs)


class EntryPointSelector:
    """ Chooses entry points using the first command-line argument as a "mode" string.
        Any unambiguous prefix of a mode name selects it. """

    def __init__(self, entry_points:Mapping[str, EntryPoint], *, default_mode:str=None) -> None:
        self._entry_points = entry_points  # Mapping of application entry points by mode.
        self._default_mode = default_mode  # Default mode string (optional, used when no mode is given).

    def _match(self, mode:str) -> List[EntryPoint]:
        if not mode:
            if not self._default_mode:
                return []
            mode = self._default_mode
        return [ep for k, ep in self._entry_points.items() if k.startswith(mode)]

    def _error_main(self, error_msg:str) -> Callable[..., int]:
        """ Return a main callable that prints every available mode and returns an error code. """
        lines = [error_msg, '', 'Currently available operations:',
                 *[f"{k} - {ep.description}" for k, ep in self._entry_points.items()]]
        def print_error(*args, **kwargs) -> int:
            print("\n".join(lines), file=sys.stderr)
            return -1
        return print_error

    def load(self, mode="") -> Callable[..., int]:
        """ Make sure <mode> matches exactly one entry point callable and return it. """
        matches = self._match(mode)
        if len(matches) == 1:
            return matches[0]
        if matches:
            return self._error_main(f'Operation "{mode}" has multiple matches. Use more characters.')
        if not mode:
            return self._error_main('An operation mode is required as the first command-line argument.')
        return self._error_main(f'No matches for operation "{mode}".')

    def main(self) -> int:
        """ Run an entry point using the first command-line argument as the mode. """
        return self.load(shift_argv())()
