""" Process-wide cache of chord tables by version. """

from typing import Callable

from .components import ChordData, Components, build_components
from .io import ChordTableIO


class ComponentTableCache:
    """ Loads each version's table on first request and keeps it for the life of the process.
        Table contents per version never change, so nothing is ever evicted. Failed loads are not cached.
        All access happens on one event loop thread; no locking is needed. """

    def __init__(self, io:ChordTableIO, log:Callable[[str], None]=None) -> None:
        self._io = io                        # Loader for raw chord tables.
        self._log = log or (lambda _: None)  # Status message callable.
        self._data = {}                      # Raw tables keyed by version.

    def __contains__(self, version:str) -> bool:
        return version in self._data

    def add(self, version:str, data:ChordData) -> None:
        """ Insert a table directly without loading it. """
        self._data[version] = data

    async def get_data(self, version:str) -> ChordData:
        """ Return the raw table for <version>, loading it on a miss. Raises ResourceIOError on failure. """
        data = self._data.get(version)
        if data is None:
            self._log(f"Loading chord table {version}...")
            data = await self._io.load(version)
            self._data[version] = data
            self._log(f"Chord table {version} loaded.")
        return data

    async def get(self, version:str) -> Components:
        """ Return normalized candidate lists for <version>. These are rebuilt per call and may be kept by a job. """
        data = await self.get_data(version)
        return build_components(data)
