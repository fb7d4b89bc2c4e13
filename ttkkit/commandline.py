"""A small command line option parser."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterable

_HELP_HEADER = "TTK Command Line Module Options:\n"


@dataclass(frozen=True)
class CommandLineOption:
    """An option known by a first name and an optional second name.

    Two options are equal when both names match; the description is not compared.
    """

    first: str
    second: str = ""
    description: str = field(default="", compare=False)


class CommandLineParser:
    """Collects options and the commands given on the command line."""

    def __init__(self, description: str = "") -> None:
        self.description = description
        self._commands: dict[str, str] = {}
        self._options: list[CommandLineOption] = []

    @property
    def options(self) -> list[CommandLineOption]:
        return list(self._options)

    def add_option(self, option: CommandLineOption) -> None:
        """Register *option*; raise ValueError if it has no first name or exists."""
        if not option.first:
            raise ValueError("command line option first key can't be empty")
        if option in self._options:
            raise ValueError(f"command line option {option.first!r} already registered")
        self._options.append(option)

    def add_options(self, options: Iterable[CommandLineOption]) -> None:
        """Register every valid option; raise ValueError afterwards if any failed."""
        failures = []
        for option in options:
            try:
                self.add_option(option)
            except ValueError as error:
                failures.append(str(error))
        if failures:
            raise ValueError("; ".join(failures))

    def process(self, arguments: Iterable[str] | None = None) -> None:
        """Record the commands in *arguments*, defaulting to ``sys.argv[1:]``.

        An argument starting with '-' is a command; a following plain argument
        becomes the value of the latest command.
        """
        if arguments is None:
            arguments = sys.argv[1:]
        last_command = ""
        for arg in arguments:
            command = arg.strip()
            if command.startswith("-"):
                self._commands[command] = ""
                last_command = command
            elif self._commands and last_command:
                self._commands[last_command] = arg

    def is_set(self, option: CommandLineOption) -> bool:
        """Tell whether either name of *option* was given."""
        return option.first in self._commands or option.second in self._commands

    def value(self, option: CommandLineOption) -> str:
        """Value given for *option*, preferring its second name."""
        first = self._commands.get(option.first, "")
        second = self._commands.get(option.second, "")
        return second or first

    def is_empty(self) -> bool:
        """Tell whether no command was given."""
        return not self._commands

    def help_text(self) -> str:
        """Text listing every option with its description."""
        lines = [self.description + _HELP_HEADER]
        for option in self._options:
            names = f"{option.first}, {option.second}" if option.second else option.first
            lines.append(f"{names.ljust(20)}{option.description}\n")
        return "".join(lines)

    def show_help(self) -> str:
        """Write the help text to standard output and return it."""
        text = self.help_text()
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return text