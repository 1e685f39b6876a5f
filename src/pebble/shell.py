"""Handles interactive mode for the Pebble interpreter. Uses cmd as backend."""
from __future__ import annotations

import cmd

from termcolor import colored

from .session import Result, Session


class Shell(cmd.Cmd):
    """Pebble interpreter shell."""

    intro = "Pebble interpreter\nType 'help' for more information, 'quit' to leave."
    prompt = ">>> "
    secondary_prompt = "... "  # used while a block is still open

    def __init__(self, session: Session | None = None, color: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        if "stdin" in kwargs:
            self.use_rawinput = False
        self.session = session if session is not None else Session()
        self.session.parser.line_supplier = self._continuation_line
        self.color = color

    #cmd strips the line before dispatch; indented input must reach the parser intact
    def precmd(self, line: str) -> str:
        if line[:1].isspace() and line.strip():
            self.default(line)
            return ""
        return line

    def default(self, line: str) -> None:
        """Executes one top-level line, reading more lines while a block is open."""
        for result in self.session.feed(line + "\n"):
            self._show(result)

    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_help(self, arg: str) -> bool:
        """Prints a short intro to the language."""
        if arg:
            return self._as_source()
        self.stdout.write(
            "Pebble is a tiny indentation-sensitive language in the style of Python.\n\n"
            "  x = 5                 bind a name in the shared environment\n"
            "  if x > 3:             open a block; indent its body, dedent to close it\n"
            "  def add(a, b):        define a function; `return` leaves it early\n"
            "  add(2, 3)             call a function\n\n"
            "Enter a blank line to close every open block.\n"
        )
        return False

    def do_quit(self, arg: str) -> bool:
        """Exits interpreter."""
        if arg:
            return self._as_source()
        return True

    do_q = do_quit
    do_exit = do_quit

    def do_EOF(self, arg: str) -> bool:
        """Exits interpreter."""
        self.stdout.write("\n")
        return True

    # Helpers -----------------------------------------------------------------

    #`quit = 1` reaches do_quit; hand the full line back to the interpreter
    def _as_source(self) -> bool:
        self.default(self.lastcmd)
        return False

    def _continuation_line(self) -> str:
        if self.use_rawinput:
            try:
                return input(self.secondary_prompt) + "\n"
            except EOFError:
                return ""
        self.stdout.write(self.secondary_prompt)
        self.stdout.flush()
        return self.stdin.readline()

    def _show(self, result: Result) -> None:
        text = result.display()
        if not text:
            return
        if not result.ok and self.color:
            kind, _, message = text.partition(": ")
            text = colored(f"{kind}:", "red", attrs=["bold"]) + f" {message}"
        self.stdout.write(text + "\n")


__all__ = ["Shell"]
