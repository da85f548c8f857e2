'''
address and network literals found in resolv.conf
'''

from __future__ import annotations

import dataclasses as dc
import ipaddress
from typing import Final, TypeAlias

from resolvconf.errors import AddrParseError

Ip: TypeAlias = ipaddress.IPv4Address | ipaddress.IPv6Address

V6_HOST_MASK: Final = ipaddress.IPv6Address((1 << 128) - 1)

# indexed by the number of trailing zero octets in the last three octets
_V4_OCTET_MASKS: Final[tuple[ipaddress.IPv4Address, ...]] = (
    ipaddress.IPv4Address('255.255.255.255'),
    ipaddress.IPv4Address('255.255.255.0'),
    ipaddress.IPv4Address('255.255.0.0'),
    ipaddress.IPv4Address('255.0.0.0'),
)


@dc.dataclass(frozen=True, slots=True)
class Network:
    '''
    A sortlist entry, an address paired with a mask of the same family.
    '''
    address: Ip
    mask: Ip

    def __post_init__(self) -> None:
        if self.address.version != self.mask.version:
            raise ValueError(
                f'address {self.address} and mask {self.mask} are of different families'
            )

    @property
    def version(self) -> int:
        return self.address.version

    @property
    def prefixlen(self) -> int | None:
        '''
        The CIDR prefix length of the mask, or None when the
        mask is not a contiguous run of leading ones.

        Returns
        -------
        int | None
        '''
        width = self.mask.max_prefixlen
        inverted = ~int(self.mask) & ((1 << width) - 1)
        if inverted & (inverted + 1):
            return None
        return width - inverted.bit_length()

    def __str__(self) -> str:
        return f'{self.address}/{self.mask}'


def parse_ip(token: str) -> Ip | AddrParseError:
    '''
    Parses a nameserver address, IPv6 literals may carry a `%scope` suffix.

    Parameters
    ----------
    token : str

    Returns
    -------
    Ip | AddrParseError
        _the address, or the error describing why it is invalid_
    '''
    try:
        return ipaddress.ip_address(token)
    except ValueError as exc:
        return AddrParseError(str(exc))


def _is_contiguous_v4_mask(mask: ipaddress.IPv4Address) -> bool:
    value = int(mask)
    if value == 0:
        return False
    inverted = ~value & 0xFFFF_FFFF
    return inverted & (inverted + 1) == 0


def infer_v4_mask(address: ipaddress.IPv4Address) -> ipaddress.IPv4Address:
    '''
    Guesses a mask from whole zero octets at the end of the address,
    so `130.155.0.0` gets `255.255.0.0`. The first octet never counts.

    Parameters
    ----------
    address : ipaddress.IPv4Address

    Returns
    -------
    ipaddress.IPv4Address
    '''
    zeros = 0
    for octet in reversed(address.packed[1:]):
        if octet:
            break
        zeros += 1
    return _V4_OCTET_MASKS[zeros]


def parse_v4_network(token: str) -> Network | AddrParseError:
    '''
    Parses `ADDRESS` or `ADDRESS/MASK` in dotted IPv4 notation.

    Parameters
    ----------
    token : str

    Returns
    -------
    Network | AddrParseError
    '''
    address_text, has_mask, mask_text = token.partition('/')
    try:
        address = ipaddress.IPv4Address(address_text)
    except ValueError as exc:
        return AddrParseError(str(exc))

    if address.is_unspecified:
        return AddrParseError(f'{address} cannot be used as a network address')

    if not has_mask:
        return Network(address, infer_v4_mask(address))

    try:
        mask = ipaddress.IPv4Address(mask_text)
    except ValueError as exc:
        return AddrParseError(str(exc))

    if not _is_contiguous_v4_mask(mask):
        return AddrParseError(f'{mask} is not a valid netmask')

    return Network(address, mask)


def parse_v6_network(token: str) -> Network | AddrParseError:
    '''
    Parses `ADDRESS` or `ADDRESS/MASK` in IPv6 notation. The mask is
    taken as given, a missing mask means a single host.

    Parameters
    ----------
    token : str

    Returns
    -------
    Network | AddrParseError
    '''
    address_text, has_mask, mask_text = token.partition('/')
    if '%' in token:
        return AddrParseError(f'scoped address {token!r} cannot be used as a network')

    try:
        address = ipaddress.IPv6Address(address_text)
        mask = ipaddress.IPv6Address(mask_text) if has_mask else V6_HOST_MASK
    except ValueError as exc:
        return AddrParseError(str(exc))

    return Network(address, mask)


def parse_network(token: str) -> Network | AddrParseError:
    '''
    Tries the IPv4 form first, then IPv6. When both fail the reported
    error is the one matching the apparent family of the token.

    Parameters
    ----------
    token : str

    Returns
    -------
    Network | AddrParseError
    '''
    network = parse_v4_network(token)
    if not isinstance(network, AddrParseError):
        return network

    fallback = parse_v6_network(token)
    if isinstance(fallback, AddrParseError) and ':' not in token:
        return network
    return fallback
