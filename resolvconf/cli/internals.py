import abc
import argparse
import asyncio
import dataclasses
from typing import Any, Generic, Self, TypeVar

from rich.console import Console


def cli_arg(
    flag: str,
    *,
    default: Any = None,
    required: bool = False,
    help: str = "",
    action: str | None = None,
) -> Any:
    '''
    Declares a dataclass field as an argparse option, `flag` is the
    option string, the field name becomes its destination.
    '''
    options: dict[str, Any] = {"help": help}
    if required:
        options["required"] = True
    if action:
        options["action"] = action
    return dataclasses.field(
        default=default,
        metadata={"flag": flag, "options": options},
    )


class ArgparseModel:
    '''
    base for `dataclass` models whose fields are built with `cli_arg`
    '''
    @classmethod
    def register(cls, parser: argparse.ArgumentParser) -> None:
        for field in dataclasses.fields(cls):  # type: ignore[arg-type]
            parser.add_argument(
                field.metadata["flag"],
                dest=field.name,
                default=field.default,
                **field.metadata["options"],
            )

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> Self:
        values = vars(args)
        return cls(**{
            field.name: values[field.name]
            for field in dataclasses.fields(cls)  # type: ignore[arg-type]
        })


A = TypeVar("A", bound=ArgparseModel)


class CLIGroup(abc.ABC, Generic[A]):
    '''
    A subcommand, `routine` returns the process exit status.
    '''
    model: type[A]
    console = Console()

    def __init__(self, parser: argparse.ArgumentParser) -> None:
        self.model.register(parser)

    @abc.abstractmethod
    async def routine(self, args: A) -> int: ...

    def __call__(self, args: argparse.Namespace) -> int:
        return asyncio.run(self.routine(self.model.from_namespace(args)))
