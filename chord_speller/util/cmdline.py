""" Module for user-configurable command-line options. """

import os
import sys
from typing import Any, Iterable, Iterator, List


class CmdlineOption:
    """ A command-line option that converts its argument strings into a single attribute value. """

    def __init__(self, key:str, desc="No description.", opt_type=str) -> None:
        self.key = key             # Option key (generally the name prefixed with --).
        self._desc = desc          # Optional description to be displayed in help.
        self._opt_type = opt_type  # Data type to be produced if the option is specified.

    def _multiargs(self) -> bool:
        """ If True, multiple command-line arguments should be combined in a string collection. """
        return issubclass(self._opt_type, (tuple, list, set))

    def __call__(self, *args:str) -> Any:
        """ Convert argument strings to the type required by this option and return it. """
        if self._multiargs():
            return self._opt_type(args)
        if len(args) != 1:
            raise ValueError(f'Option {self.key} takes exactly one argument, got {len(args)}.')
        return self._opt_type(*args)

    def usage(self) -> str:
        argstr = '<str> [<str> ...]' if self._multiargs() else '<' + self._opt_type.__name__ + '>'
        return f'{self.key}={argstr}'

    def description(self) -> str:
        return self._desc


def format_help(opts:Iterable[CmdlineOption], script_name:str, description:str, col_width=32) -> str:
    """ Format a usage line and one line of help per option. """
    opts = list(opts)
    usage = "".join(['usage: ', script_name, *[f' [{opt.usage()}]' for opt in opts], ' [-h|--help]'])
    lines = [description, usage, ""]
    for key, desc in [*[(opt.key, opt.description()) for opt in opts], ("-h, --help", "Show this help message and exit.")]:
        if len(key) < col_width:
            lines.append(key.ljust(col_width) + desc)
        else:
            lines += [key, '    ' + desc]
    lines.append("")
    return '\n'.join(lines)


def group_args(argv:Iterable[str]) -> Iterator[List[str]]:
    """
    Split arguments into groups, each starting with an option key prefixed by at least one '-'.
    An option's first argument may follow it after '='; any further arguments follow it after spaces:

      extras  extras           3 args                        1 arg
    |*******| |****| [ key ] |---------------| [  key  ] [  key  ] |-|
    lookup    hello  --files=a.txt b.txt c.txt --verbose --timeout=300

    The first group holds arguments that come before any option (positional arguments).
    """
    group = []
    for s in argv:
        if s.startswith('-'):
            yield group
            k, *eq = s.split('=', 1)
            group = [k, *eq]
        else:
            group.append(s)
    yield group


class CmdlineOptions:
    """ Namespace class for CmdlineOption objects. Option values are accessed as instance attributes.
        Unparsed options will fall back to default values. Arguments before the first option are kept in order. """

    def __init__(self, app_description="Command line application.") -> None:
        self._app_description = app_description  # App description shown in command-line help.
        self._options = {}                       # Contains all option objects keyed by their destination attributes.
        self._args = []                          # Positional arguments and any unrecognized options.

    def __getattr__(self, name:str) -> Any:
        raise AttributeError(f'"{name}" is not the name of a valid command-line option.')

    def add(self, name:str, default:Any=None, desc="No description.") -> None:
        """ Add a new option and set its attribute to be the default value (until parsed).
            Since attribute names cannot have hyphens, they are replaced with underscores. """
        opt_type = str if default is None else type(default)
        attr_name = name.replace("-", "_")
        self._options[attr_name] = CmdlineOption("--" + name, desc, opt_type)
        setattr(self, attr_name, default)

    def args(self) -> List[str]:
        """ Return all positional arguments left over from parsing. """
        return self._args[:]

    def print_help(self, script_name:str, file=None) -> None:
        text = format_help(self._options.values(), script_name, self._app_description)
        (file or sys.stdout).write(text)

    def parse(self, argv:Iterable[str]=None) -> None:
        """ Parse options into instance attributes. Arguments are taken from <argv> if provided, otherwise
            from sys.argv. Either way, the first item is the script name. Help options print usage and exit. """
        script, *argv = (argv or sys.argv)
        script = os.path.basename(script) if script else ""
        opts_by_key = {opt.key: attr for attr, opt in self._options.items()}
        positional, *groups = group_args(argv)
        self._args = positional
        for k, *args in groups:
            if k in ('-h', '--help'):
                self.print_help(script)
                sys.exit(0)
            attr = opts_by_key.get(k)
            if attr is None:
                self._args += [k, *args]
            else:
                setattr(self, attr, self._options[attr](*args))
