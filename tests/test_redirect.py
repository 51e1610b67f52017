import pytest

from minishellpy.redirect import process_redirection, read_heredoc
from minishellpy.shell import Command, Shell
from minishellpy.tokens import TokenType


def _reader(lines):
    it = iter(lines)
    return lambda prompt: next(it, None)


def test_output_creates_and_truncates(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old content")
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.REDIRECT_OUT, str(target))
    assert target.read_text() == ""
    assert command.outfile == str(target)
    assert command.append is False
    assert shell.exit_status == 0


def test_append_keeps_content(tmp_path):
    target = tmp_path / "log.txt"
    target.write_text("keep")
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.APPEND, str(target))
    assert target.read_text() == "keep"
    assert command.append is True


def test_append_creates_missing_file(tmp_path):
    target = tmp_path / "new.txt"
    process_redirection(Shell(), Command(), TokenType.APPEND, str(target))
    assert target.exists()


def test_output_in_missing_directory_fails(tmp_path, capsys):
    target = str(tmp_path / "missing" / "out.txt")
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.REDIRECT_OUT, target)
    assert command.exit_status == 1
    assert shell.exit_status == 1
    assert capsys.readouterr().err == f"minishell: {target}: Permission denied\n"


def test_input_existing_file(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("data")
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.REDIRECT_IN, str(source))
    assert command.infile == str(source)
    assert command.exit_status == 0


def test_input_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "none.txt")
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.REDIRECT_IN, missing)
    assert command.infile == missing
    assert command.exit_status == 1
    assert shell.exit_status == 1
    assert capsys.readouterr().err == (
        f"minishell: {missing}: No such file or directory\n"
    )


def test_later_success_resets_shell_status_only(tmp_path):
    shell, command = Shell(), Command()
    process_redirection(shell, command, TokenType.REDIRECT_IN, str(tmp_path / "x"))
    process_redirection(shell, command, TokenType.HEREDOC, "EOF")
    assert command.exit_status == 1
    assert shell.exit_status == 1


def test_heredoc_records_delimiter():
    shell, command = Shell(exit_status=1), Command()
    process_redirection(shell, command, TokenType.HEREDOC, "EOF")
    assert command.delimiter == "EOF"
    assert command.heredoc is True
    assert shell.exit_status == 0


def test_non_redirection_operator_rejected():
    with pytest.raises(ValueError):
        process_redirection(Shell(), Command(), TokenType.PIPE, "x")


def test_read_heredoc_stops_at_delimiter():
    text = read_heredoc("EOF", [], _reader(["one", "two", "EOF", "three"]))
    assert text == "one\ntwo\n"


def test_read_heredoc_expands_variables():
    text = read_heredoc("END", ["NAME=alice"], _reader(["hi $NAME", "END"]))
    assert text == "hi alice\n"


def test_read_heredoc_stops_at_end_of_input():
    assert read_heredoc("EOF", [], _reader(["only"])) == "only\n"


def test_read_heredoc_stops_on_eoferror():
    def reader(prompt):
        raise EOFError

    assert read_heredoc("EOF", [], reader) == ""


def test_read_heredoc_passes_prompt():
    prompts = []
    lines = iter(["line", "EOF"])

    def reader(prompt):
        prompts.append(prompt)
        return next(lines)

    text = read_heredoc("EOF", [], reader)
    assert text == "line\n"
    assert prompts == ["> ", "> "]