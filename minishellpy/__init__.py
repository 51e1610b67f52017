"""Building blocks of a small shell: tokenizer, syntax checks, expansion, redirections, builtins and pipeline execution."""

__version__ = "0.1.0"