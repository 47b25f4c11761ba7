from typing import Optional

from chord_speller.host import parse_max_entries
from chord_speller.util.cmdline import CmdlineOptions
from chord_speller.util.path import module_directory, PrefixPathConverter, user_data_directory

# The name of the root package is used as a default path for built-in assets and user files.
ROOT_PACKAGE = __package__.split(".", 1)[0]


class SpellerOptions(CmdlineOptions):
    """ Contains all command-line options necessary to build essential components. """

    ASSET_PATH_PREFIX = ":/"  # Prefix that indicates built-in assets.
    USER_PATH_PREFIX = "~/"   # Prefix that indicates local user app data.

    def __init__(self, app_description="Running the chord speller as a library (should never be seen).") -> None:
        super().__init__(app_description)
        self.add("log", self.USER_PATH_PREFIX + "status.log",
                 "Text file to log status and exceptions.")
        self.add("tables", self.ASSET_PATH_PREFIX + "assets",
                 "Directory or http(s):// base URL with one JSON chord table per version.")
        self.add("table-fmt", "pinchord-chords-{}.json",
                 "File name of each chord table. {} is replaced by the version.")
        self.add("version", "demo",
                 "Chord table version to spell with.")
        self.add("max-entries", "",
                 "Maximum number of spellings per word (blank = unlimited).")
        self.add("batch-size", 5,
                 "Number of spellings found between each pause for new requests.")
        self.add("matcher", "indexed",
                 "Prefix matcher type: 'indexed' builds a trie once per job, 'simple' enumerates every time.")
        converter = PrefixPathConverter()
        converter.add(self.ASSET_PATH_PREFIX, module_directory(ROOT_PACKAGE))
        converter.add(self.USER_PATH_PREFIX, user_data_directory(ROOT_PACKAGE))
        self._convert_path = converter.convert

    def log_path(self) -> str:
        """ Return the path for the log file, creating empty directories to its location if necessary. """
        return self._convert_path(self.log, make_dirs=True)

    def tables_path(self) -> str:
        """ Return the directory path or URL holding the chord tables. """
        return self._convert_path(self.tables)

    def max_entries_limit(self) -> Optional[int]:
        """ Return the per-word spelling cap, or None for unlimited. """
        return parse_max_entries(self.max_entries)
