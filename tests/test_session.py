from pebble import ast
from pebble.session import Session, run_source


#runs helper programs and keeps only the produced values
def values(source: str):
    results = run_source(source)
    assert all(result.ok for result in results), [result.display() for result in results]
    return [result.value for result in results]


#the else branch is skipped and the binding from the taken branch survives
def test_if_else_program() -> None:
    result = values(
        """
if 1 < 2:
    x = 10
else:
    x = 20
x
"""
    )
    assert result[-1] == ast.Int(10)


#defined functions add their arguments; wrong arity is a TypeError
def test_function_definition_and_call() -> None:
    results = run_source(
        """
def f(a, b):
    return a + b
f(2, 3)
f(1)
"""
    )
    assert results[1].value == ast.Int(5)
    error = results[2].error
    assert error is not None
    assert error.kind == "TypeError"
    assert "expected 2" in error.message
    assert "1 given" in error.message


#a return nested in an if ends the call immediately
def test_non_local_return() -> None:
    result = values(
        """
def sign(x):
    if x < 0:
        return -1
    return 1
sign(-5)
sign(3)
"""
    )
    assert result[1:] == [ast.Int(-1), ast.Int(1)]


#recursion works because arguments are evaluated before rebinding
def test_recursion_through_shared_environment() -> None:
    result = values(
        """
def fact(n):
    if n < 2:
        return 1
    else:
        return n * fact(n - 1)
fact(5)
n
"""
    )
    assert result[1] == ast.Int(120)
    #the innermost call's binding of n is what remains visible
    assert result[2] == ast.Int(1)


#a call rebinds a caller-visible name of the same spelling
def test_calls_clobber_outer_bindings() -> None:
    result = values(
        """
x = 1
def echo(x):
    return x
echo(42)
x
"""
    )
    assert result[-1] == ast.Int(42)


#a function without return yields a no-op that displays as nothing
def test_function_without_return() -> None:
    results = run_source("def setter(v):\n    stored = v\nsetter(3)\nstored\n")
    assert results[1].value == ast.NoOp()
    assert results[1].display() == ""
    assert results[2].value == ast.Int(3)


#elif picks the first matching branch
def test_elif_chain() -> None:
    result = values(
        """
x = 5
if x < 3:
    y = "small"
elif x < 10:
    y = "medium"
else:
    y = "large"
y
"""
    )
    assert result[-1] == ast.String("medium")


#bindings written before an error stay in effect
def test_no_rollback_after_error() -> None:
    results = run_source(
        """
def f(p):
    q = 5
    return p / 0
f(1)
q
p
"""
    )
    assert results[1].display() == "ZeroDivisionError: division by zero"
    assert results[2].value == ast.Int(5)
    assert results[3].value == ast.Int(1)


#each top-level statement is independent of an earlier failure
def test_errors_do_not_stop_later_statements() -> None:
    results = run_source("x = 1\ny\nx\n")
    assert [result.ok for result in results] == [True, False, True]
    assert results[1].display() == "NameError: name 'y' is not defined"
    assert results[2].value == ast.Int(1)


#a top-level return reports the value it carries
def test_top_level_return() -> None:
    assert values("return 4") == [ast.Int(4)]


#the REPL's blank line dedents to column zero and closes the block
def test_blank_line_closes_block() -> None:
    lines = iter(["    a = 1\n", "\n"])
    session = Session(lambda: next(lines, ""))
    results = session.feed("if True:\n")
    assert [result.value for result in results] == [ast.Int(1)]
    assert session.env.lookup("a") == ast.Int(1)


#the line that closes a block runs as the next statement
def test_closing_line_statements_run_in_order() -> None:
    lines = iter(["    total = 2\n", "total * 10\n"])
    session = Session(lambda: next(lines, ""))
    results = session.feed("if True:\n")
    assert [result.display() for result in results] == ["2", "20"]


#syntax errors surface as results with their kind
def test_syntax_error_result() -> None:
    (result,) = run_source("1 +")
    assert not result.ok
    assert result.display() == "SyntaxError: expected expression, but reached end of tokens"


#display follows Python's echo of values
def test_display_of_values() -> None:
    results = run_source("1.5\nTrue\n\"hi\"\n7 / 2\n")
    assert [result.display() for result in results] == ["1.5", "True", "'hi'", "3.5"]


#runaway recursion is reported as an error and later statements still run
def test_unbounded_recursion_is_reported() -> None:
    results = run_source(
        """
def down(n):
    return down(n + 1)
down(0)
1 + 1
"""
    )
    assert results[1].error is not None
    assert results[1].display() == "RecursionError: maximum recursion depth exceeded"
    assert results[2].value == ast.Int(2)
