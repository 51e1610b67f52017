"""State of a running shell and of the commands it parses."""

from __future__ import annotations

from dataclasses import dataclass, field

from minishellpy.tokens import Token


@dataclass
class Command:
    """One command of a pipeline, with its redirections."""

    args: list[str] = field(default_factory=list)
    infile: str | None = None
    delimiter: str | None = None
    outfile: str | None = None
    append: bool = False
    heredoc: bool = False
    builtin: bool = False
    exit_status: int = 0


@dataclass
class Shell:
    """Environment, exit status and the parse state of the current line."""

    env: list[str] = field(default_factory=list)
    input: str | None = None
    exit_status: int = 0
    last_exit_status: int = 0
    tokens: list[Token] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)

    def reset(self) -> None:
        """Drop the current line, its tokens and its commands."""
        self.input = None
        self.tokens = []
        self.commands = []