""" Module for loading chord tables by version from a local directory or an HTTP server. """

import asyncio
from functools import wraps
import json
from typing import Any, Awaitable, Callable

from aiohttp import ClientError, ClientSession, ClientTimeout

from .components import ChordData


class ResourceIOError(Exception):
    """ General exception for any chord table I/O or decoding error. """


def try_load(func:Callable[..., Awaitable]) -> Callable[..., Awaitable]:
    """ Decorator to re-raise I/O and parsing exceptions with more general error messages for the end-user. """
    @wraps(func)
    async def load(self, version:str) -> Any:
        source = self.source(version)
        try:
            return await func(self, version)
        except ResourceIOError as e:
            raise ResourceIOError(f'Failed to load {version}: {e}') from e
        except (OSError, ClientError, asyncio.TimeoutError) as e:
            raise ResourceIOError(f'Failed to load {version}: {source} is inaccessible or missing.') from e
        except (TypeError, ValueError) as e:
            raise ResourceIOError(f'Failed to load {version}: {source} is not formatted correctly.') from e
    return load


class ChordTableIO:
    """ Loads one JSON chord table per version. The base location may be a directory or an http(s):// URL.
        Files may contain full-line comments (CSON = commented JSON) if their name ends in .cson. """

    def __init__(self, base:str, filename_fmt="pinchord-chords-{}.json", *,
                 encoding='utf-8', comment_prefix="#", timeout=30.0) -> None:
        self._base = base                      # Directory path or base URL containing the tables.
        self._filename_fmt = filename_fmt      # Format string for table file names. {} is replaced by the version.
        self._encoding = encoding              # Character encoding. UTF-8 must be explicitly set on some platforms.
        self._comment_prefix = comment_prefix  # Prefix for comment lines in CSON files.
        self._timeout = timeout                # Total timeout in seconds for HTTP requests.

    def _is_remote(self) -> bool:
        return self._base.startswith(("http://", "https://"))

    def source(self, version:str) -> str:
        """ Return the full path or URL of the table for <version>. """
        filename = self._filename_fmt.format(version)
        if self._is_remote():
            return self._base.rstrip("/") + "/" + filename
        return self._base.rstrip("/\\") + "/" + filename

    def _cson_strip(self, s:str) -> str:
        """ Strip full-line comments. JSON doesn't care about leading or trailing whitespace. """
        lines = map(str.strip, s.split("\n"))
        return "\n".join([line for line in lines if line and not line.startswith(self._comment_prefix)])

    def _read_file(self, path:str) -> str:
        with open(path, 'r', encoding=self._encoding) as fp:
            return fp.read()

    async def _fetch(self, url:str) -> str:
        """ GET a table over HTTP. Any non-2xx status is a load failure. """
        timeout = ClientTimeout(total=self._timeout)
        async with ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                if response.status >= 300:
                    raise ResourceIOError(f'{url} returned HTTP {response.status} {response.reason}.')
                data = await response.read()
        return data.decode(self._encoding)

    def _decode(self, source:str, s:str) -> ChordData:
        if source.endswith(".cson"):
            s = self._cson_strip(s)
        d = json.loads(s)
        if not isinstance(d, dict):
            raise TypeError(source + ' does not contain a JSON object.')
        return ChordData.from_json(d)

    @try_load
    async def load(self, version:str) -> ChordData:
        """ Load and decode the chord table for <version>. """
        source = self.source(version)
        if self._is_remote():
            s = await self._fetch(source)
        else:
            s = self._read_file(source)
        return self._decode(source, s)
