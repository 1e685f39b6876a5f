"""Pebble: a tiny indentation-sensitive scripting language."""

#makes package exports explicit for downstream imports
from . import ast, cli, dump, environment, errors, indent, interpreter, lexer, parser, session, shell, token

__all__ = [
    "ast",
    "cli",
    "dump",
    "environment",
    "errors",
    "indent",
    "interpreter",
    "lexer",
    "parser",
    "session",
    "shell",
    "token",
]
