import re

import pytest

from minishellpy.shell import Shell
from minishellpy.syntax import (
    ShellSyntaxError,
    check_pipes,
    check_redirections,
    check_syntax,
)
from minishellpy.tokens import tokenize

PIPE_MSG = "minishell: syntax error near unexpected token `|'"
REDIR_MSG = "minishell: syntax error near redirection"


@pytest.mark.parametrize("line", ["| ls", "ls | | wc", "ls |", "|"])
def test_bad_pipes(line):
    with pytest.raises(ShellSyntaxError, match=re.escape(PIPE_MSG)):
        check_pipes(tokenize(line))


@pytest.mark.parametrize("line", ["cat <", "cat < | wc", "cat < > f", "echo >> <<"])
def test_bad_redirections(line):
    with pytest.raises(ShellSyntaxError, match=re.escape(REDIR_MSG)):
        check_redirections(tokenize(line))


@pytest.mark.parametrize(
    "line", ["ls | wc", "cat < 'in' > \"out\"", "cat << EOF | grep x >> log", ""]
)
def test_valid_lines_keep_state(line):
    shell = Shell()
    shell.tokens = tokenize(line)
    before = [t.text for t in shell.tokens]
    check_syntax(shell)
    assert [t.text for t in shell.tokens] == before
    assert shell.exit_status == 0


def test_check_syntax_pipe_error_sets_status():
    shell = Shell()
    shell.tokens = tokenize("ls | | wc")
    with pytest.raises(ShellSyntaxError, match=re.escape(PIPE_MSG)):
        check_syntax(shell)
    assert shell.tokens == []
    assert shell.exit_status == 2


def test_check_syntax_redirection_error_sets_status():
    shell = Shell()
    shell.tokens = tokenize("echo hi >")
    with pytest.raises(ShellSyntaxError, match=re.escape(REDIR_MSG)):
        check_syntax(shell)
    assert shell.tokens == []
    assert shell.exit_status == 2


def test_pipe_checked_before_redirection():
    shell = Shell()
    shell.tokens = tokenize("> |")
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(shell)
    assert str(info.value) == PIPE_MSG