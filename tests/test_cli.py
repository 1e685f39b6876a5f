import io
from pathlib import Path

from pebble.cli import main
from pebble.shell import Shell


#drives the shell from an in-memory stdin and returns everything written
def run_shell(script: str) -> str:
    stdout = io.StringIO()
    Shell(color=False, stdin=io.StringIO(script), stdout=stdout).cmdloop(intro="")
    return stdout.getvalue()


#writes a program to disk for the file-based subcommands
def write_program(tmp_path: Path, source: str) -> Path:
    path = tmp_path / "program.pb"
    path.write_text(source)
    return path


#blocks read continuation lines until a blank line closes them
def test_shell_reads_block_lines() -> None:
    output = run_shell("x = 2\nif x > 1:\n    y = x * 3\n\ny\nquit\n")
    assert output.startswith(">>> 2\n")
    assert ">>> ... ... 6\n" in output
    assert output.endswith(">>> 6\n>>> ")


#errors are shown as `<Kind>: <message>` and the shell keeps going
def test_shell_reports_errors_and_continues() -> None:
    output = run_shell("1 / 0\n\"a\" * 2\n")
    assert "ZeroDivisionError: division by zero\n" in output
    assert "'aa'\n" in output


#a name shared with a shell command still reaches the interpreter
def test_shell_command_names_as_variables() -> None:
    output = run_shell("quit = 3\nquit + 1\nquit\n")
    assert ">>> 3\n" in output
    assert ">>> 4\n" in output


#`run` prints each displayed value in order
def test_cli_run(tmp_path: Path, capsys) -> None:
    path = write_program(
        tmp_path,
        "def add(a, b):\n"
        "    return a + b\n"
        "\n"
        "add(2, 3)\n"
        "add(\"x\", \"y\")\n",
    )
    assert main(["run", str(path), "--no-color"]) == 0
    assert capsys.readouterr().out.splitlines() == ["5", "'xy'"]


#the first runtime error stops `run` with a failing exit status
def test_cli_run_stops_on_error(tmp_path: Path, capsys) -> None:
    path = write_program(tmp_path, "1\nmissing\n2\n")
    assert main(["run", str(path), "--no-color"]) == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1"]
    assert "NameError: name 'missing' is not defined" in captured.err


#`--trace` logs calls made by the interpreter
def test_cli_run_trace(tmp_path: Path, capsys) -> None:
    path = write_program(tmp_path, "def one():\n    return 1\none()\n")
    assert main(["run", str(path), "--trace", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "[trace] call one()" in out
    assert "[trace] return from one" in out


#`tokens` echoes the markers and tokens of every physical line
def test_cli_tokens(tmp_path: Path, capsys) -> None:
    path = write_program(tmp_path, "if x:\n    y = 1\nz\n")
    assert main(["tokens", str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "   1: IF, IDENTIFIER, COLON",
        "   2: INDENT(4), IDENTIFIER, ASSIGN, INTEGER(1)",
        "   3: DEDENT(0), IDENTIFIER",
    ]


#`parse` prints trees without evaluating anything
def test_cli_parse(tmp_path: Path, capsys) -> None:
    path = write_program(tmp_path, "x = 1 - 2 - 3\n")
    assert main(["parse", str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "VarAssign x",
        "  Binop SUB",
        "    Int 1",
        "    Binop SUB",
        "      Int 2",
        "      Int 3",
    ]


#`run --tokens` echoes each line's tokens as the parser reads it
def test_cli_run_echoes_tokens(tmp_path: Path, capsys) -> None:
    path = write_program(tmp_path, "if True:\n    1\n")
    assert main(["run", str(path), "--tokens", "--no-color"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "   1: IF, BOOL(True), COLON",
        "   2: INDENT(4), INTEGER(1)",
        "   3: DEDENT(-1)",
        "1",
    ]


#an indented top-level line is rejected in the shell as it is by `run`
def test_shell_rejects_unexpected_indent() -> None:
    output = run_shell("    x = 1\nx\n")
    assert "IndentationError: unexpected indent\n" in output
    assert "NameError: name 'x' is not defined\n" in output


#`run` allows recursion well past the default host stack depth
def test_cli_run_deep_recursion(tmp_path: Path, capsys) -> None:
    path = write_program(
        tmp_path,
        "def count(n):\n"
        "    if n < 1:\n"
        "        return 0\n"
        "    return 1 + count(n - 1)\n"
        "count(300)\n",
    )
    assert main(["run", str(path), "--no-color"]) == 0
    assert capsys.readouterr().out.splitlines() == ["300"]
