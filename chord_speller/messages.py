""" Module for the messages exchanged between a host and the spelling scheduler. All are JSON objects. """

from typing import Any, Dict, List, Union, get_type_hints

JSONType = Union[None, bool, int, float, str, list, dict]  # Python types directly supported by json module.
JSONDict = Dict[str, JSONType]


class JSONStruct(JSONDict):
    """ Struct/record type designed for serialization as a JSON object.
        To do so without a custom encoder, it must be a dictionary (if only internally).
        Subclasses form a schema by adding annotations to specify required and optional fields. """

    def __init__(self, **kwargs:JSONType) -> None:
        """ Check annotations for required fields and copy default values for optional ones. """
        super().__init__(kwargs)
        for k in get_type_hints(type(self)):
            if k not in self:
                try:
                    self[k] = getattr(self, k)
                except AttributeError:
                    raise TypeError(f'Missing required field "{k}"') from None
        self.__dict__ = self


class ComputeRequest(JSONStruct):
    """ Asks for every spelling of <target> using the chord table for <version>.
        The target must already be normalized by the host; the engine takes it as-is. """

    type: str = "compute"
    id: int                # Caller-assigned job ID. A request with a new ID supersedes any job in progress.
    version: str           # Version key of the chord table to use.
    target: str            # Text to spell.
    maxEntries: int = None  # Maximum number of spellings to produce. None means unlimited.

    @classmethod
    def from_json(cls, obj:Any) -> "ComputeRequest":
        """ Validate a decoded JSON object and build a request from it. Unknown fields are dropped. """
        if not isinstance(obj, dict):
            raise TypeError('Request must be a JSON object.')
        fields = {k: obj[k] for k in ("type", "id", "version", "target", "maxEntries") if k in obj}
        req = cls(**fields)
        if not isinstance(req.id, int) or isinstance(req.id, bool):
            raise TypeError('Request "id" must be an integer.')
        for k in ("version", "target"):
            if not isinstance(req[k], str):
                raise TypeError(f'Request "{k}" must be a string.')
        max_entries = req.maxEntries
        if max_entries is not None:
            if not isinstance(max_entries, int) or isinstance(max_entries, bool):
                raise TypeError('Request "maxEntries" must be an integer.')
            if max_entries < 1:
                raise ValueError('Request "maxEntries" must be positive.')
        return req


class ChunkMessage(JSONStruct):
    """ One batch of spellings for a job. Both lists have equal length and are index-aligned. """

    type: str = "chunk"
    id: int
    spellings: List[str]          # Display strings, one per spelling.
    strokes: List[List[List[str]]]  # Strokes of each spelling, one 4-item list per chord.


class ResultDoneMessage(JSONStruct):
    """ Sent exactly once when a job finishes successfully. <total> is the number of spellings sent. """

    type: str = "resultDone"
    id: int
    total: int


class ErrorMessage(JSONStruct):
    """ Sent exactly once in place of ResultDoneMessage when a job fails. """

    type: str = "error"
    id: int = None
    message: str
