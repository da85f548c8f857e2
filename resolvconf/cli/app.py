import argparse
import json
import sys
from dataclasses import dataclass

import dns.exception
from loguru import logger

from resolvconf.cli.internals import ArgparseModel, CLIGroup, cli_arg
from resolvconf.config import Config
from resolvconf.core._logging import configure_lib_logger
from resolvconf.core.fs_utils import FileConstraintsError
from resolvconf.errors import ParseError
from resolvconf.loader import DEFAULT_PATH, load


@dataclass
class ShowArgs(ArgparseModel):
    file: str = cli_arg(
        "--file",
        default=DEFAULT_PATH,
        help="Path to the resolv.conf file to parse",
    )
    as_json: bool = cli_arg(
        "--json",
        default=False,
        action="store_true",
        help="Print the parsed configuration as JSON",
    )
    verbose: bool = cli_arg(
        "--verbose",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )


@dataclass
class CheckArgs(ArgparseModel):
    file: str = cli_arg(
        "--file",
        default=DEFAULT_PATH,
        help="Path to the resolv.conf file to validate",
    )
    verbose: bool = cli_arg(
        "--verbose",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )


@dataclass
class QueryArgs(ArgparseModel):
    name: str = cli_arg(
        "--name",
        required=True,
        help="Domain name to resolve",
    )
    rtype: str = cli_arg(
        "--rtype",
        default="A",
        help="Record type to query, e.g. A, AAAA, MX",
    )
    file: str = cli_arg(
        "--file",
        default=DEFAULT_PATH,
        help="Path to the resolv.conf file providing nameservers and options",
    )
    verbose: bool = cli_arg(
        "--verbose",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )


def load_or_report(group: CLIGroup, path: str) -> Config | None:
    try:
        return load(path)
    except FileConstraintsError as exc:
        group.console.print(f"[red]Error:[/red] {exc}")
    except ParseError as exc:
        group.console.print(f"[red]Error in {path}:[/red] {exc}")
    return None


class ShowGroup(CLIGroup[ShowArgs]):
    model = ShowArgs

    async def routine(self, args: ShowArgs) -> int:
        config = load_or_report(self, args.file)
        if config is None:
            return 1

        if args.as_json:
            self.console.print_json(json.dumps(config.to_dict()))
        else:
            self.console.print(config.render())
        return 0


class CheckGroup(CLIGroup[CheckArgs]):
    model = CheckArgs

    async def routine(self, args: CheckArgs) -> int:
        config = load_or_report(self, args.file)
        if config is None:
            return 1

        self.console.print(
            f"[green]OK[/green] {args.file}: "
            f"{len(config.nameservers)} nameservers, "
            f"{len(config.sortlist)} sortlist entries"
        )
        return 0


class QueryGroup(CLIGroup[QueryArgs]):
    model = QueryArgs

    async def routine(self, args: QueryArgs) -> int:
        from resolvconf.resolver import lookup_name

        config = load_or_report(self, args.file)
        if config is None:
            return 1

        try:
            result = await lookup_name(config=config, name=args.name, rtype=args.rtype)
        except dns.exception.DNSException as exc:
            self.console.print(f"[red]Error:[/red] {exc}")
            return 1

        self.console.print(result.render())
        return 0


def create_app() -> argparse.ArgumentParser:
    app_schema = {
        "show": {
            "class": ShowGroup,
            "help": "Parse a resolv.conf file and print its settings",
        },
        "check": {
            "class": CheckGroup,
            "help": "Validate a resolv.conf file, reporting the first bad line",
        },
        "query": {
            "class": QueryGroup,
            "help": "Resolve a name with the nameservers of a resolv.conf file",
        },
    }

    parser = argparse.ArgumentParser(
        prog="resolvconf",
        description="resolv.conf parser and inspector",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        title="subcommands",
        description="valid subcommands",
        help="additional help",
        dest="command",
    )

    for app_name, config in app_schema.items():
        app_class: type[CLIGroup] = config["class"]

        subparser = subparsers.add_parser(
            app_name,
            help=config["help"],
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )
        group: CLIGroup = app_class(subparser)
        subparser.set_defaults(func=group)

    return parser


def run(argv: list[str] | None = None) -> int:
    parser = create_app()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    configure_lib_logger(level_name="DEBUG" if args.verbose else "WARNING")
    logger.debug(f"running subcommand {args.command}")
    return args.func(args)


def main() -> None:
    sys.exit(run())
