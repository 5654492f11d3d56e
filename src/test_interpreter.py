import pytest

from formula_lang.interpreter import Interpreter
from formula_lang.parser import parse
from formula_lang.ast import BinaryExpr, UnaryExpr, Literal, INTEGER, IDENTIFIER
from formula_lang.errors import EvalError, UndefinedVariable, DivisionByZero, NumericOverflow


def run_formula(source, symbols=None):
    return Interpreter(symbols).interpret(parse(source))


@pytest.mark.parametrize("source, expected", [
    ("A=1", 1.0),
    ("A=2+3*4", 14.0),
    ("A=(2+3)*4", 20.0),
    ("A=-5", -5.0),
    ("A=--5", 5.0),
    ("A=-(2+3)", -5.0),
    ("A=1.5*2", 3.0),
    ("A=1.2e3/10", 120.0),
])
def test_arithmetic(source, expected):
    assert run_formula(source) == ('A', expected)


def test_parenthesized_division():
    name, value = run_formula("A=(8/10)+9")
    assert name == 'A'
    assert value == pytest.approx(9.8)


def test_chained_subtraction_evaluates_right_to_left():
    # 10-(3-2), not (10-3)-2
    assert run_formula("A=10-3-2") == ('A', 9.0)


def test_chained_division_evaluates_right_to_left():
    # 8/(4/2), not (8/4)/2
    assert run_formula("A=8/4/2") == ('A', 4.0)


def test_result_is_float():
    _, value = run_formula("A=7")
    assert isinstance(value, float)


def test_reads_and_commits_symbols():
    symbols = {'B': 2}
    interpreter = Interpreter(symbols)

    assert interpreter.interpret(parse("A=B*3")) == ('A', 6.0)
    assert symbols == {'B': 2, 'A': 6.0}
    assert interpreter.symbols is symbols


def test_self_reference_uses_previous_value():
    symbols = {'A': 1.0}
    assert run_formula("A=A+1", symbols) == ('A', 2.0)
    assert symbols == {'A': 2.0}


def test_identifiers_are_case_sensitive():
    with pytest.raises(UndefinedVariable):
        run_formula("A=b", {'B': 1.0})


def test_division_by_zero():
    with pytest.raises(DivisionByZero) as excinfo:
        run_formula("A=1/0")
    assert isinstance(excinfo.value, ZeroDivisionError)
    assert isinstance(excinfo.value, EvalError)


@pytest.mark.parametrize("source", ["A=1/0.0", "A=1/(2-2)", "A=1/-0", "A=x/y"])
def test_division_by_computed_zero(source):
    with pytest.raises(DivisionByZero):
        run_formula(source, {'x': 1.0, 'y': 0.0})


def test_undefined_variable():
    with pytest.raises(UndefinedVariable) as excinfo:
        run_formula("A=B+1", {})
    assert excinfo.value.name == 'B'
    assert isinstance(excinfo.value, NameError)
    assert "'B'" in str(excinfo.value)


def test_failed_evaluation_leaves_symbols_unchanged():
    symbols = {'A': 1.0}
    with pytest.raises(DivisionByZero):
        run_formula("A=A/0", symbols)
    with pytest.raises(UndefinedVariable):
        run_formula("C=A+B", symbols)
    assert symbols == {'A': 1.0}


def test_malformed_literal_is_internal_error():
    with pytest.raises(RuntimeError):
        Interpreter().evaluate(Literal('1x', INTEGER))


def test_nested_assignment_is_rejected():
    inner = BinaryExpr('=', Literal('B', IDENTIFIER), Literal('1', INTEGER))
    with pytest.raises(EvalError):
        Interpreter().evaluate(UnaryExpr('-', inner))


def test_interpret_requires_assignment():
    with pytest.raises(EvalError):
        Interpreter().interpret(Literal('1', INTEGER))
    with pytest.raises(EvalError):
        Interpreter().interpret(BinaryExpr('=', Literal('1', INTEGER), Literal('1', INTEGER)))


def test_unknown_node_type():
    with pytest.raises(TypeError):
        Interpreter().evaluate("1 + 2")


def test_get_symbols_csv():
    interpreter = Interpreter({'b': 2.0, 'a': 1.5})
    assert interpreter.get_symbols_csv() == "a,1.5\r\nb,2.0\r\n"


def test_get_symbols_csv_empty():
    assert Interpreter().get_symbols_csv() == ""


@pytest.mark.parametrize("source", ["A=1/1e-320", "A=1e308*10", "A=-1e308-1e308", "A=1e999"])
def test_non_finite_result_is_rejected(source):
    with pytest.raises(NumericOverflow) as excinfo:
        run_formula(source)
    assert isinstance(excinfo.value, OverflowError)
    assert isinstance(excinfo.value, EvalError)


def test_non_finite_symbol_is_rejected():
    symbols = {'x': float('inf')}
    with pytest.raises(NumericOverflow):
        run_formula("A=x", symbols)
    assert symbols == {'x': float('inf')}


def test_deeply_nested_tree_raises_eval_error():
    node = Literal('1', INTEGER)
    for _ in range(5000):
        node = UnaryExpr('-', node)
    with pytest.raises(EvalError) as excinfo:
        Interpreter().interpret(BinaryExpr('=', Literal('A', IDENTIFIER), node))
    assert "nested too deeply" in str(excinfo.value)
