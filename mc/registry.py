"""Command and global-flag registry.

The registry is built once at process entry, handed to the CLI group, and
sealed before bootstrap runs. Registration order is the help display order.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import click

from mc.errors import DuplicateRegistrationError, RegistrySealedError


@dataclass(frozen=True)
class CommandDescriptor:
    """A registered subcommand."""

    name: str
    usage: str
    handler: click.Command


@dataclass(frozen=True)
class FlagDescriptor:
    """A registered global flag.

    ``effect`` names the RuntimeMode field this flag sets, or None when the
    flag has no process-wide effect.
    """

    name: str
    kind: type
    default: Any
    usage: str
    aliases: Tuple[str, ...] = ()
    effect: Optional[str] = None

    @property
    def param_name(self) -> str:
        return self.name.replace("-", "_")

    @property
    def is_bool(self) -> bool:
        return self.kind is bool

    def to_option(self) -> click.Option:
        decls = [f"--{self.name}"] + [f"-{a}" if len(a) == 1 else f"--{a}" for a in self.aliases]
        decls.append(self.param_name)
        if self.is_bool:
            return click.Option(decls, is_flag=True, default=bool(self.default), help=self.usage)
        return click.Option(decls, type=str, default=self.default, help=self.usage)


class Registry:
    """Append-only registry of commands and global flags."""

    def __init__(self):
        self._commands: List[CommandDescriptor] = []
        self._command_index: Dict[str, CommandDescriptor] = {}
        self._flags: Dict[str, FlagDescriptor] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def _check_open(self, kind: str, name: str) -> None:
        if self._sealed:
            raise RegistrySealedError(f"Cannot register {kind} ‘{name}’ after startup.")

    def register_command(self, descriptor: CommandDescriptor) -> None:
        self._check_open("command", descriptor.name)
        if descriptor.name in self._command_index:
            raise DuplicateRegistrationError(f"Command ‘{descriptor.name}’ is already registered.")
        self._commands.append(descriptor)
        self._command_index[descriptor.name] = descriptor

    def register_flag(self, descriptor: FlagDescriptor) -> None:
        self._check_open("flag", descriptor.name)
        if descriptor.name in self._flags:
            raise DuplicateRegistrationError(f"Flag ‘{descriptor.name}’ is already registered.")
        self._flags[descriptor.name] = descriptor

    def lookup_command(self, name: str) -> Optional[CommandDescriptor]:
        return self._command_index.get(name)

    def lookup_flag(self, name: str) -> Optional[FlagDescriptor]:
        return self._flags.get(name)

    @property
    def commands(self) -> Tuple[CommandDescriptor, ...]:
        return tuple(self._commands)

    @property
    def flags(self) -> Tuple[FlagDescriptor, ...]:
        return tuple(self._flags.values())

    def __iter__(self):
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self._commands)
