""" Module for parsing file and resource paths. """

import os
import sys

# Default user path components are for Linux, since it has several possible platform identifiers.
DEFAULT_USERPATH_COMPONENTS = (".local", "share", "{0}")
# User path components specific to Windows and Mac OS.
PLATFORM_USERPATH_COMPONENTS = {"win32": ("AppData", "Local", "{0}", "{0}"),
                                "darwin": ("Library", "Application Support", "{0}")}


def user_data_directory(app_name:str) -> str:
    """ Find an application's user data directory based on a platform-specific path expansion. """
    path_components = PLATFORM_USERPATH_COMPONENTS.get(sys.platform) or DEFAULT_USERPATH_COMPONENTS
    path = os.path.join("~", *path_components).format(app_name)
    return os.path.expanduser(path)


def module_directory(mod_name:str) -> str:
    """ Find (or import) a module and return the directory it lives in. """
    module = sys.modules.get(mod_name) or __import__(mod_name)
    return os.path.dirname(module.__file__)


class PrefixPathConverter:
    """ Deciphers resource paths based on prefix characters (such as ~ for user home).
        URLs pass through unchanged. """

    def __init__(self) -> None:
        self._path_table = []  # Matchable path prefixes paired with their base paths, longest prefix first.

    def add(self, prefix:str, base_path:str) -> None:
        self._path_table.append((prefix, os.path.normpath(base_path)))
        self._path_table.sort(key=lambda x: -len(x[0]))

    def convert(self, path:str, *, make_dirs=False) -> str:
        """ Expand a special prefix on <path> if it has one. If <make_dirs> is true,
            create directories as needed to make a valid path for write mode. """
        if "://" in path:
            return path
        for prefix, base_path in self._path_table:
            if path.startswith(prefix):
                path = os.path.join(base_path, path[len(prefix):])
                break
        if make_dirs:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        return path
