'''
builds dnspython resolvers from a parsed resolv.conf
'''

from __future__ import annotations

import contextlib
import dataclasses as dc
import ipaddress
from typing import TypeVar

import dns.asyncresolver
import dns.name
import dns.rdatatype
import dns.resolver
from loguru import logger

from resolvconf.config import Config
from resolvconf.ip import Ip

R = TypeVar('R', bound=dns.resolver.BaseResolver)


def _nameserver_text(address: Ip) -> str:
    if isinstance(address, ipaddress.IPv6Address) and address.scope_id:
        logger.warning(
            f'dropping scope {address.scope_id!r} from nameserver {address}, '
            'dnspython does not accept zone ids'
        )
        return str(ipaddress.IPv6Address(int(address)))
    return str(address)


def configure_resolver(resolver: R, config: Config) -> R:
    '''
    Copies the settings of `config` onto a dnspython resolver.

    Parameters
    ----------
    resolver : dns.resolver.BaseResolver
        _an unconfigured resolver_
    config : Config

    Returns
    -------
    dns.resolver.BaseResolver
        _the same resolver_

    Raises
    ------
    dns.resolver.NoResolverConfiguration
        _the config lists no nameservers_
    '''
    if not config.nameservers:
        raise dns.resolver.NoResolverConfiguration('no nameservers')

    resolver.nameservers = [_nameserver_text(ns) for ns in config.nameservers]
    if config.domain is not None:
        resolver.domain = dns.name.from_text(config.domain)
    resolver.search = [dns.name.from_text(name) for name in config.search or []]

    resolver.ndots = config.ndots
    resolver.timeout = float(config.timeout)
    resolver.lifetime = float(config.timeout * max(config.attempts, 1))
    resolver.rotate = config.rotate
    if config.edns0:
        resolver.use_edns(0)

    logger.debug(
        f'resolver configured with {len(config.nameservers)} nameservers, '
        f'ndots={config.ndots}, lifetime={resolver.lifetime}'
    )
    return resolver


def create_resolver(config: Config) -> dns.resolver.Resolver:
    return configure_resolver(dns.resolver.Resolver(configure=False), config)


def create_async_resolver(config: Config) -> dns.asyncresolver.Resolver:
    return configure_resolver(dns.asyncresolver.Resolver(configure=False), config)


@dc.dataclass(slots=True)
class NameLookup:
    '''
    The answers to a single query made through a configured resolver.
    '''
    name: str
    rtype: str
    answers: list[str] = dc.field(default_factory=list)
    warnings: list[str] = dc.field(default_factory=list)

    @contextlib.contextmanager
    def collect_warnings(self):
        try:
            yield
        except dns.resolver.NXDOMAIN:
            self.warnings.append(f'Domain {self.name} does not exist')
        except dns.resolver.NoAnswer:
            self.warnings.append(f'No answer for {self.rtype} record')
        except dns.resolver.NoNameservers:
            self.warnings.append(f'No nameservers available for {self.name}')
        except dns.resolver.Timeout:
            self.warnings.append(f'Timeout while querying {self.rtype} record')

    def render(self) -> str:
        output = f'[bold]{self.rtype} Records for {self.name}:[/bold]\n'
        if not self.answers:
            output += ' - None\n'
        for answer in self.answers:
            output += f' - {answer}\n'
        if self.warnings:
            output += '[red]Warnings:[/red]\n'
            for warning in self.warnings:
                output += f' - {warning}\n'
        return output


async def lookup_name(
    *,
    config: Config,
    name: str,
    rtype: str = 'A',
) -> NameLookup:
    '''
    Resolves `name` using the nameservers and options of `config`.

    Parameters
    ----------
    config : Config
    name : str
    rtype : str, optional
        by default 'A'

    Returns
    -------
    NameLookup
    '''
    resolver = create_async_resolver(config)
    result = NameLookup(name=name, rtype=dns.rdatatype.to_text(dns.rdatatype.from_text(rtype)))
    with result.collect_warnings():
        answer = await resolver.resolve(name, result.rtype)
        result.answers.extend(rdata.to_text() for rdata in answer)
    return result
