'''
the resolv.conf grammar: tokenizing, directive dispatch and options
'''

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import Final

import dns.exception
import dns.name
from loguru import logger

from resolvconf.config import Config, Family, Lookup
from resolvconf.errors import (
    AddrParseError,
    ExtraData,
    InvalidDirective,
    InvalidIp,
    InvalidOption,
    InvalidOptionValue,
    InvalidUtf8,
    InvalidValue,
)
from resolvconf.ip import parse_ip, parse_network

_COMMENT_CHARS: Final = b';#'
_INLINE_COMMENT: Final = re.compile(r'[;#]')
# unicode whitespace without the \x1c-\x1f separators that str.split() also breaks on
_WHITESPACE: Final = re.compile(r'[^\S\x1c-\x1f]+')
_UNSIGNED: Final = re.compile(r'\+?[0-9]+')
_U32_MAX: Final = 0xFFFF_FFFF

# option keyword -> (Config attribute, value it is set to)
_FLAG_OPTIONS: Final[dict[str, tuple[str, bool]]] = {
    'debug': ('debug', True),
    'rotate': ('rotate', True),
    'no-check-names': ('no_check_names', True),
    'inet6': ('inet6', True),
    'ip6-bytestring': ('ip6_bytestring', True),
    'ip6-dotint': ('ip6_dotint', True),
    'no-ip6-dotint': ('ip6_dotint', False),
    'edns0': ('edns0', True),
    'single-request': ('single_request', True),
    'single-request-reopen': ('single_request_reopen', True),
    'no-reload': ('no_reload', True),
    'trust-ad': ('trust_ad', True),
    'no-tld-query': ('no_tld_query', True),
    'use-vc': ('use_vc', True),
}

_NUMERIC_OPTIONS: Final = frozenset({'ndots', 'timeout', 'attempts'})

_FAMILIES: Final[dict[str, Family]] = {
    'inet4': Family.INET4,
    'inet6': Family.INET6,
}


def _is_full_comment(content: bytes) -> bool:
    stripped = content.lstrip(b' \t')
    return bool(stripped) and stripped[0] in _COMMENT_CHARS


def iter_lines(data: bytes) -> Iterator[tuple[int, list[str]]]:
    '''
    Splits the buffer on `\\n` and yields the tokens of every line
    that holds something other than whitespace and comments.

    Lines whose first non-blank byte starts a comment are skipped
    before decoding, so they may contain invalid UTF-8.

    Parameters
    ----------
    data : bytes

    Yields
    ------
    tuple[int, list[str]]
        _the 0-based line index and its tokens_

    Raises
    ------
    InvalidUtf8
    '''
    for line, content in enumerate(data.split(b'\n')):
        if _is_full_comment(content):
            continue
        try:
            text = content.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(line, exc) from exc

        content_text = _INLINE_COMMENT.split(text, maxsplit=1)[0]
        tokens = [token for token in _WHITESPACE.split(content_text) if token]
        if tokens:
            yield line, tokens


def _parse_unsigned(value: str | None) -> int | None:
    if value is None or not _UNSIGNED.fullmatch(value):
        return None
    number = int(value)
    if number > _U32_MAX:
        return None
    return number


def _is_domain_name(token: str) -> bool:
    try:
        dns.name.from_text(token)
    except dns.exception.DNSException:
        return False
    return True


def parse_options(cfg: Config, line: int, tokens: list[str]) -> None:
    '''
    Applies the `key[:value]` pairs of an `options` line to the config.

    Parameters
    ----------
    cfg : Config
    line : int
    tokens : list[str]

    Raises
    ------
    ExtraData
        _a pair holds more than one colon_
    InvalidOptionValue
        _a numeric option has a missing or bad value_
    InvalidOption
        _the key is not a known option_
    '''
    for token in tokens:
        parts = token.split(':')
        if len(parts) > 2:
            raise ExtraData(line)
        key = parts[0]
        value = parts[1] if len(parts) == 2 else None

        if key in _FLAG_OPTIONS:
            attr, flag = _FLAG_OPTIONS[key]
            setattr(cfg, attr, flag)
        elif key in _NUMERIC_OPTIONS:
            number = _parse_unsigned(value)
            if number is None:
                raise InvalidOptionValue(line)
            setattr(cfg, key, number)
        else:
            raise InvalidOption(line)


def _nameserver(cfg: Config, line: int, tokens: list[str]) -> None:
    if not tokens:
        raise InvalidValue(line)
    address = parse_ip(tokens[0])
    if isinstance(address, AddrParseError):
        raise InvalidIp(line, address)
    if len(tokens) > 1:
        raise ExtraData(line)
    cfg.nameservers.append(address)


def _domain(cfg: Config, line: int, tokens: list[str]) -> None:
    if not tokens or not _is_domain_name(tokens[0]):
        raise InvalidValue(line)
    if len(tokens) > 1:
        raise ExtraData(line)
    cfg.set_domain(tokens[0])


def _search(cfg: Config, line: int, tokens: list[str]) -> None:
    cfg.set_search(tokens)


def _sortlist(cfg: Config, line: int, tokens: list[str]) -> None:
    cfg.sortlist.clear()
    for token in tokens:
        network = parse_network(token)
        if isinstance(network, AddrParseError):
            raise InvalidIp(line, network)
        cfg.sortlist.append(network)


def _lookup(cfg: Config, line: int, tokens: list[str]) -> None:
    cfg.lookup.extend(Lookup.from_token(token) for token in tokens)


def _family(cfg: Config, line: int, tokens: list[str]) -> None:
    for token in tokens:
        family = _FAMILIES.get(token)
        if family is None:
            raise InvalidValue(line)
        cfg.family.append(family)


DIRECTIVES: Final[dict[str, Callable[[Config, int, list[str]], None]]] = {
    'nameserver': _nameserver,
    'domain': _domain,
    'search': _search,
    'sortlist': _sortlist,
    'options': parse_options,
    'lookup': _lookup,
    'family': _family,
}


def parse(data: bytes | str) -> Config:
    '''
    Parses the contents of a resolv.conf file. Processing stops at
    the first malformed line.

    Parameters
    ----------
    data : bytes | str
        _the raw file contents, str is encoded as UTF-8_

    Returns
    -------
    Config

    Raises
    ------
    ParseError
        _one of its subclasses, carrying the 0-based line number_
    '''
    if isinstance(data, str):
        data = data.encode('utf-8')

    cfg = Config()
    directives = 0
    for line, tokens in iter_lines(data):
        keyword, *rest = tokens
        handler = DIRECTIVES.get(keyword)
        if handler is None:
            raise InvalidDirective(line)
        handler(cfg, line, rest)
        directives += 1

    logger.debug(f'parsed {directives} directives')
    return cfg
