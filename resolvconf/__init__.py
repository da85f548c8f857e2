from loguru import logger

from .config import Config, Family, Lookup, LookupKind
from .errors import (
    AddrParseError,
    ExtraData,
    InvalidDirective,
    InvalidIp,
    InvalidOption,
    InvalidOptionValue,
    InvalidUtf8,
    InvalidValue,
    ParseError,
)
from .grammar import parse
from .ip import Ip, Network
from .loader import DEFAULT_PATH, load

logger.disable(__name__)

__all__ = [
    "Config",
    "Family",
    "Lookup",
    "LookupKind",
    "Ip",
    "Network",
    "parse",
    "load",
    "DEFAULT_PATH",
    "ParseError",
    "AddrParseError",
    "InvalidUtf8",
    "InvalidValue",
    "InvalidOptionValue",
    "InvalidOption",
    "InvalidDirective",
    "InvalidIp",
    "ExtraData",
]
