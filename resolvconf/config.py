from __future__ import annotations

import dataclasses as dc
import enum
import socket
from collections.abc import Iterator
from typing import Any, Self

from resolvconf.ip import Ip, Network


class LookupKind(enum.Enum):
    FILE = 'file'
    BIND = 'bind'
    EXTRA = 'extra'


@dc.dataclass(frozen=True, slots=True)
class Lookup:
    '''
    A `lookup` database, `file`, `bind` or any other name kept verbatim.
    '''
    kind: LookupKind
    name: str

    @classmethod
    def file(cls) -> Self:
        return cls(LookupKind.FILE, 'file')

    @classmethod
    def bind(cls) -> Self:
        return cls(LookupKind.BIND, 'bind')

    @classmethod
    def extra(cls, name: str) -> Self:
        return cls(LookupKind.EXTRA, name)

    @classmethod
    def from_token(cls, token: str) -> Self:
        if token == 'file':
            return cls.file()
        if token == 'bind':
            return cls.bind()
        return cls.extra(token)

    def __str__(self) -> str:
        return self.name


class Family(enum.Enum):
    INET4 = 'inet4'
    INET6 = 'inet6'

    def __str__(self) -> str:
        return self.value


@dc.dataclass(slots=True)
class Config:
    '''
    The parsed contents of a resolv.conf file.

    `domain` and `search` are mutually exclusive, whichever of the
    two was set last wins, matching the glibc resolver. Use
    `set_domain` and `set_search` rather than assigning them directly.
    '''
    nameservers: list[Ip] = dc.field(default_factory=list)
    domain: str | None = None
    search: list[str] | None = None
    sortlist: list[Network] = dc.field(default_factory=list)

    debug: bool = False
    ndots: int = 1
    timeout: int = 5
    attempts: int = 2
    rotate: bool = False
    no_check_names: bool = False
    inet6: bool = False
    ip6_bytestring: bool = False
    ip6_dotint: bool = False
    edns0: bool = False
    single_request: bool = False
    single_request_reopen: bool = False
    no_tld_query: bool = False
    use_vc: bool = False
    no_reload: bool = False
    trust_ad: bool = False

    lookup: list[Lookup] = dc.field(default_factory=list)
    family: list[Family] = dc.field(default_factory=list)

    @classmethod
    def parse(cls, data: bytes | str) -> Config:
        '''
        Parses resolv.conf contents, see `resolvconf.grammar.parse`.

        Parameters
        ----------
        data : bytes | str

        Returns
        -------
        Config

        Raises
        ------
        ParseError
            _the first malformed line_
        '''
        from resolvconf.grammar import parse

        return parse(data)

    def set_nameservers(self, nameservers: list[Ip]) -> None:
        self.nameservers = list(nameservers)

    def set_domain(self, domain: str) -> None:
        self.domain = domain
        self.search = None

    def set_search(self, search: list[str]) -> None:
        self.search = list(search)
        self.domain = None

    def get_last_search_or_domain(self) -> Iterator[str]:
        '''
        Yields the domains a resolver appends to unqualified names,
        the search list if one is active, otherwise the local domain.
        '''
        if self.search is not None:
            yield from self.search
        elif self.domain is not None:
            yield self.domain

    def get_system_domain(self) -> str | None:
        '''
        The local domain, falling back on the part of the
        host name after its first dot.

        Returns
        -------
        str | None
        '''
        if self.domain is not None:
            return self.domain

        hostname = socket.gethostname()
        _, dot, domain = hostname.partition('.')
        if not dot or not domain:
            return None
        return domain

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for field in dc.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, list):
                value = [str(item) for item in value]
            data[field.name] = value
        return data

    def render(self) -> str:
        output = 'Resolver Configuration:\n'
        output += '[bold]Nameservers:[/bold]\n'
        for nameserver in self.nameservers:
            output += f' - {nameserver}\n'
        if self.domain is not None:
            output += f'[bold]Domain:[/bold] {self.domain}\n'
        if self.search is not None:
            output += f'[bold]Search:[/bold] {" ".join(self.search) or "(empty)"}\n'
        if self.sortlist:
            output += '[bold]Sortlist:[/bold]\n'
            for network in self.sortlist:
                output += f' - {network}\n'

        output += (
            f'[bold]ndots:[/bold] {self.ndots}  '
            f'[bold]timeout:[/bold] {self.timeout}  '
            f'[bold]attempts:[/bold] {self.attempts}\n'
        )
        enabled = [
            field.name
            for field in dc.fields(self)
            if field.type in ('bool', bool) and getattr(self, field.name)
        ]
        output += f'[bold]Options:[/bold] {", ".join(enabled) or "None"}\n'

        if self.lookup:
            output += f'[bold]Lookup:[/bold] {" ".join(map(str, self.lookup))}\n'
        if self.family:
            output += f'[bold]Family:[/bold] {" ".join(map(str, self.family))}\n'
        return output

    def __str__(self) -> str:
        return self.render()
