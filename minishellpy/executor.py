"""Running a parsed pipeline: built-ins in the shell, the rest as programs."""

from __future__ import annotations

import copy
import io
import os
import subprocess
import sys
from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import BinaryIO, TextIO

from minishellpy.builtins import (
    ShellExit,
    run_cd,
    run_echo,
    run_env,
    run_exit,
    run_export,
    run_pwd,
    run_unset,
)
from minishellpy.redirect import read_heredoc
from minishellpy.shell import Command, Shell

NOT_FOUND_STATUS = 127
NOT_EXECUTABLE_STATUS = 126
INTERRUPTED_STATUS = 130


class CommandNotFoundError(LookupError):
    """Raised when a command cannot be resolved to an executable file."""

    status = NOT_FOUND_STATUS

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


_Builtin = Callable[[Shell, Sequence[str], TextIO], int]

_BUILTINS: dict[str, _Builtin] = {
    "echo": lambda shell, args, out: run_echo(args, out),
    "cd": run_cd,
    "pwd": lambda shell, args, out: run_pwd(out),
    "export": run_export,
    "unset": run_unset,
    "env": lambda shell, args, out: run_env(shell.env, out),
    "exit": run_exit,
}


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def exit_status_from_returncode(returncode: int) -> int:
    """Turn a child's return code into a shell exit status.

    A child killed by a signal gets 128 plus the signal number.
    """
    if returncode < 0:
        return (128 - returncode) % 256
    return returncode % 256


def find_executable(name: str, env: Sequence[str]) -> str:
    """Resolve ``name`` through the PATH entry of ``env``.

    A name holding a ``/`` is used as it is. Raises CommandNotFoundError
    when the name is empty, when there is no PATH entry, or when no
    executable file is found.
    """
    if not name:
        raise CommandNotFoundError("minishell: command '' not found")
    path_entry = next((entry for entry in env if entry.startswith("PATH")), None)
    if path_entry is None:
        raise CommandNotFoundError("No PATH found")
    if "/" in name:
        if os.access(name, os.F_OK | os.X_OK):
            return name
        raise CommandNotFoundError(f"command not found: {name}")
    for directory in filter(None, path_entry[5:].split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    raise CommandNotFoundError(f"command not found: {name}")


def execute_builtin(shell: Shell, command: Command, out: TextIO) -> int | None:
    """Run a built-in command, writing its output to ``out``.

    Records the result as the shell's last exit status and returns it;
    returns None when the command is not a built-in. ``exit`` raises
    ShellExit.
    """
    if not command.args:
        command.args = [""]
    handler = _BUILTINS.get(command.args[0])
    if handler is None:
        return None
    shell.last_exit_status = handler(shell, command.args, out)
    return shell.last_exit_status


def _env_mapping(env: Sequence[str]) -> dict[str, str]:
    mapping = {}
    for entry in env:
        key, equal, value = entry.partition("=")
        if equal:
            mapping[key] = value
    return mapping


def _run_program(
    shell: Shell,
    command: Command,
    stdin_data: bytes | None,
    infile: BinaryIO | None,
    stdout: BinaryIO | int | None,
) -> tuple[int, bytes]:
    if not command.args:
        _error("Error: empty command")
        return NOT_FOUND_STATUS, b""
    try:
        path = find_executable(command.args[0], shell.env)
    except CommandNotFoundError as exc:
        _error(exc.message)
        return exc.status, b""
    options: dict[str, object] = {"stdout": stdout}
    if stdin_data is not None:
        options["input"] = stdin_data
    else:
        options["stdin"] = infile
    sys.stdout.flush()
    try:
        completed = subprocess.run(
            command.args,
            executable=path,
            env=_env_mapping(shell.env),
            check=False,
            **options,
        )
    except KeyboardInterrupt:
        return INTERRUPTED_STATUS, b""
    except OSError as exc:
        _error(f"minishell: {command.args[0]}: {exc.strerror}")
        return NOT_EXECUTABLE_STATUS, b""
    return exit_status_from_returncode(completed.returncode), completed.stdout or b""


def _run_stage(
    shell: Shell, command: Command, piped_input: bytes | None, to_pipe: bool
) -> tuple[int, bytes]:
    """Run one command of a pipeline in isolation from the shell's state.

    Returns its exit status and, when ``to_pipe`` is set, its output.
    """
    with ExitStack() as stack:
        stdin_data: bytes | None = None
        infile: BinaryIO | None = None
        outfile: BinaryIO | None = None
        try:
            if command.heredoc:
                text = read_heredoc(command.delimiter or "", shell.env, input)
                stdin_data = text.encode()
            elif command.infile is not None:
                infile = stack.enter_context(open(command.infile, "rb"))
            if command.outfile is not None:
                mode = "ab" if command.append else "wb"
                outfile = stack.enter_context(open(command.outfile, mode))
        except OSError:
            return 1, b""
        # A pipe takes the place of any file redirection on the same side.
        if piped_input is not None:
            stdin_data = piped_input
            infile = None
        if to_pipe:
            outfile = None

        if command.builtin:
            child = copy.deepcopy(shell)
            buffer = io.StringIO()
            target = buffer if (to_pipe or outfile is not None) else sys.stdout
            try:
                status = execute_builtin(child, command, target)
            except ShellExit as exc:
                status = exc.status
            data = buffer.getvalue().encode()
            if to_pipe:
                return status or 0, data
            if outfile is not None:
                outfile.write(data)
            return status or 0, b""

        stdout: BinaryIO | int | None = subprocess.PIPE if to_pipe else outfile
        return _run_program(shell, command, stdin_data, infile, stdout)


def _run_lone_builtin(shell: Shell, command: Command) -> None:
    if command.args[:1] == ["echo"] and command.outfile is not None:
        mode = "a" if command.append else "w"
        try:
            handle = open(command.outfile, mode, encoding="utf-8")
        except OSError:
            execute_builtin(shell, command, sys.stdout)
            return
        with handle:
            execute_builtin(shell, command, handle)
        return
    execute_builtin(shell, command, sys.stdout)


def execute(shell: Shell) -> int:
    """Run the shell's commands and return the resulting exit status.

    A single built-in runs inside the shell and may change its state; in
    a pipeline every command runs on its own and the commands run one
    after another, each fed the output of the one before.
    """
    commands = shell.commands
    if not commands:
        return shell.exit_status
    first = commands[0]
    if first.builtin and len(commands) == 1:
        _run_lone_builtin(shell, first)
        return shell.exit_status
    piped: bytes | None = None
    last = len(commands) - 1
    for index, command in enumerate(commands):
        to_pipe = index < last
        status, output = _run_stage(shell, command, piped, to_pipe)
        shell.exit_status = status
        piped = output if to_pipe else None
        if command.builtin and command.args[:1] == ["exit"]:
            raise ShellExit(shell.last_exit_status)
    return shell.exit_status