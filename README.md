# minishellpy

The stages of a small Unix-style shell as a Python library. You can split a
line into tokens, check its syntax, expand `$NAME` and `$?`, strip quotes,
record redirections and run a pipeline of commands. Builtins run in Python.
Any other command is looked up on the `PATH` entry of the shell's
environment and run as a child process.

## Stages

1. **Tokenizing.** `minishellpy.tokens.tokenize(line)` returns a list of
   `Token` objects. Each has `text`, `type` (a `TokenType`), `join` and
   `expand`. Quotes stay in the token text. `<`, `<<`, `>`, `>>` and `|`
   become operator tokens. A quote left open raises `UnclosedQuoteError`.
   Pieces written with no space between them, such as `a"b"'c'`, are marked
   `join`. `join_tokens(tokens)` merges them.
2. **Syntax.** `minishellpy.syntax.check_pipes` rejects a pipe at the start
   or end of a line and two pipes in a row. `check_redirections` requires a
   word or a quoted string after every redirection. Both raise
   `ShellSyntaxError`. `check_syntax(shell)` runs both checks on
   `shell.tokens`. On an error it clears the tokens, sets
   `shell.exit_status` to 2 and raises the error again.
3. **Expansion.** In `minishellpy.expand`:
   - `mark_expansions(tokens)` flags the tokens that hold a `$` outside
     single quotes.
   - `expand_variables(shell)` replaces `$NAME` and `$?` in the flagged
     tokens. `$?` takes `shell.last_exit_status`, and names that are not
     set expand to nothing.
   - `expand_token(token, env)` does the same for one token but leaves `$?`
     in place.
   - `expand_heredoc(text, env)` expands `$NAME` in a here-document line.
   - `getenv(env, name)` reads a value from a list of `KEY=value` entries.
4. **Quote removal.** `minishellpy.dequote.remove_quotes(text)` drops
   quote pairs and keeps what they enclose. `dequotize(tokens)` unquotes
   every text token, turns it into a word and joins glued tokens. It
   returns the new list.
5. **Redirections.** `minishellpy.redirect.process_redirection(shell,
   command, operator, target)` records a `<`, `>`, `>>` or `<<` on a
   `Command`:
   - For `<` it checks that the input file can be read.
   - For `>` and `>>` it creates the output file, and `>` truncates it.
   - A failure sets the command's status to 1.

   `read_heredoc(delimiter, env, reader)` collects here-document lines
   until the delimiter or end of input. Each line is expanded.
6. **Execution.** `minishellpy.executor.execute(shell)` runs
   `shell.commands` and returns the exit status. A single builtin runs in
   the shell and can change its environment and directory. In a pipeline
   the commands run one after another, each reading the output of the one
   before. A builtin inside a pipeline works on a copy of the shell.
   Here-documents are read from standard input with `input`.
   - `find_executable(name, env)` resolves a command through `PATH`. If it
     cannot, it raises `CommandNotFoundError`, whose status is 127.
   - `exit_status_from_returncode` maps a child killed by a signal to
     128 plus the signal number.

## Builtins

`minishellpy.builtins` provides `run_echo`, `run_cd`, `run_pwd`,
`run_export`, `run_unset`, `run_env` and `run_exit`. Each writes to the text
stream it is given.

- `echo` accepts `-n`, `-nn` and so on.
- `cd` goes to `HOME` when given no argument or `~`, and to `OLDPWD` when
  given `-`. It updates `PWD` and `OLDPWD`.
- `export` with no arguments prints the sorted `declare -x` listing.
- `export` and `unset` reject names that are not valid identifiers and
  return status 1.
- `exit` raises `ShellExit` carrying the status. A non-numeric argument
  gives status 2. More than one argument only reports an error.

`is_builtin(name)` tells whether a name is one of these.
`minishellpy.environment` holds the list helpers they use:
`is_valid_identifier`, `env_key`, `find_env`, `set_env`, `remove_env` and
`export_listing`.

## State

`minishellpy.shell.Shell` holds:

- `env`, a list of `KEY=value` strings;
- `input`, `exit_status` and `last_exit_status`;
- `tokens` and `commands` for the current line.

`Shell.reset()` drops the current line. `Command` holds `args`, `infile`,
`outfile`, `append`, `delimiter`, `heredoc`, `builtin` and `exit_status`.

## Example

```python
from minishellpy.dequote import dequotize
from minishellpy.executor import execute
from minishellpy.expand import expand_variables, mark_expansions
from minishellpy.shell import Command, Shell
from minishellpy.syntax import check_syntax
from minishellpy.tokens import tokenize

shell = Shell(env=["PATH=/usr/bin:/bin", "NAME=world"])
shell.tokens = tokenize('echo "hello $NAME"')
check_syntax(shell)
if mark_expansions(shell.tokens):
    expand_variables(shell)
words = [token.text for token in dequotize(shell.tokens)]
print(words)  # ['echo', 'hello world']

shell.commands = [Command(args=words, builtin=True)]
execute(shell)  # prints: hello world
```

## What it does not do

The package has no interactive prompt, line history or command to start a
shell. It also has no step that turns a token list into `Command` objects.
The caller builds `shell.commands` from the tokens, using
`process_redirection` for the redirection operators. The caller also
catches `ShellExit` to end its own loop. Ctrl-C handling is limited to a
child process being interrupted, which gives status 130.