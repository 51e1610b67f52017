from minishellpy.shell import Command, Shell
from minishellpy.tokens import tokenize


def test_new_shell_defaults():
    shell = Shell(env=["A=1"])
    assert shell.env == ["A=1"]
    assert shell.input is None
    assert shell.exit_status == 0
    assert shell.last_exit_status == 0
    assert shell.tokens == []
    assert shell.commands == []


def test_reset_clears_line_state_only():
    shell = Shell(env=["A=1"], exit_status=2, last_exit_status=1)
    shell.input = "ls | wc"
    shell.tokens = tokenize(shell.input)
    shell.commands = [Command(args=["ls"]), Command(args=["wc"])]
    shell.reset()
    assert shell.input is None
    assert shell.tokens == []
    assert shell.commands == []
    assert shell.env == ["A=1"]
    assert shell.exit_status == 2
    assert shell.last_exit_status == 1


def test_command_defaults():
    command = Command()
    assert command.args == []
    assert command.infile is None
    assert command.outfile is None
    assert command.delimiter is None
    assert command.append is False
    assert command.heredoc is False
    assert command.builtin is False
    assert command.exit_status == 0


def test_instances_do_not_share_lists():
    first, second = Shell(), Shell()
    first.env.append("X=1")
    assert second.env == []
    a, b = Command(), Command()
    a.args.append("ls")
    assert b.args == []