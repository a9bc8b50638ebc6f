from .context import Context
from .entities import ENTITIES, ENTITY_MAX_LENGTH, ENTITY_MIN_LENGTH, REPLACEMENT_CHAR
from .errors import ParseError
from .unescape import Unescaper, UnescaperOpts, decode, decode_attribute, decode_general

__all__ = [
    "ENTITIES",
    "ENTITY_MAX_LENGTH",
    "ENTITY_MIN_LENGTH",
    "REPLACEMENT_CHAR",
    "Context",
    "ParseError",
    "Unescaper",
    "UnescaperOpts",
    "decode",
    "decode_attribute",
    "decode_general",
]
