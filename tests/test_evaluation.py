import sys

import pytest

from risp.interpreter import Interpreter
from risp.types import errors
from risp.types.values import Lambda, Macro, SpecialForm


@pytest.mark.parametrize(
    "source,expected",
    [
        # literals
        ("1", 1.0),
        ('"s"', "s"),
        ("#t", True),
        ("'()", []),
        # arithmetic
        ("(+ 1 2 3)", 6.0),
        ("(+)", 0.0),
        ("(*)", 1.0),
        ("(* 2 3 4)", 24.0),
        ("(- 10 1 2)", 7.0),
        ("(- 5)", 5.0),
        ("(+ 0.5 (* 2 (- 3 1)))", 4.5),
        # equality
        ("(= 1 1)", True),
        ("(= 1 2)", False),
        ("(= 'a 'a)", True),
        ("(= 'a 'b)", False),
        # lists
        ("(first '(1 2))", 1.0),
        ("(rest '(1 2))", [2.0]),
        ("(rest '())", []),
        ("(list 1 (+ 1 1))", [1.0, 2.0]),
        ("(list)", []),
        ("(concat '(1) '() '(2 3))", [1.0, 2.0, 3.0]),
        ("(concat)", []),
        ("(is-list '())", True),
        ("(is-list 1)", False),
        ("(length '(1 2 3))", 3.0),
        # special forms
        ("(quote (1 2))", [1.0, 2.0]),
        ("(begin 1 2 3)", 3.0),
        ("(def x 5)", 5.0),
        ("(def x 5) x", 5.0),
        ("(if #t 1 2)", 1.0),
        ("(if #f 1 2)", 2.0),
        ("(if #f 1)", False),
        ("(if #f 1 2 3)", 3.0),
        ("(if (= 1 1) 'yes 'no) (= (if #f 1 'no) 'no)", True),
        ("(let ((x 1) (y 2)) (+ x y))", 3.0),
        ("(let () 1 2)", 2.0),
        # functions
        ("((fn (x) (+ x 1)) 2)", 3.0),
        ("((fn () 1 2 3))", 3.0),
        ("(def f (fn (a &rest r) r)) (f 1 2 3)", [2.0, 3.0]),
        ("(def f (fn (a &rest r) r)) (f 1)", []),
        ("(def sq (fn (x) (* x x))) (sq (sq 2))", 16.0),
        ("((quote (fn (x) (* x x))) 3)", 9.0),
        ("(def fact (fn (n) (if (= n 0) 1 (* n (fact (- n 1)))))) (fact 5)", 120.0),
        # special forms are first-class values
        ("(def my-if if) (my-if #f 1 2)", 2.0),
        # quasiquote
        ("(def x 2) `(1 ,x ,@(list 3 4))", [1.0, 2.0, 3.0, 4.0]),
    ],
)
def test_evaluation(interp, source, expected):
    assert interp.eval_source(source)[-1] == expected


@pytest.mark.parametrize(
    "source,printed",
    [
        ("`x", "x"),
        ("`(a ,@'() b)", "(a b)"),
        ("(def x 2) `(x ,x (,x))", "(x 2 (2))"),
        ("(list 'a 'b)", "(a b)"),
        ("(fn (x) x)", "(fn (x) x)"),
    ],
)
def test_evaluation_printed(interp, source, printed):
    assert interp.serialize(interp.eval_source(source)[-1]) == printed


def test_let_scoping(run, fails):
    assert run("(let ((x 1)) (let ((x 2)) x))") == 2.0
    err = fails("(let ((x 1)) x) x", errors.UnboundSymbol)
    assert err.message == "Unbound symbol 'x'"


def test_let_binds_simultaneously(run):
    assert run("(def x 1) (let ((x 2) (y x)) y)") == 1.0


def test_define_inside_function_is_global(run):
    assert run("((fn () (def g 7))) g") == 7.0


def test_set_only_touches_current_scope(run):
    assert run("(def s 1) ((fn () (set s 2) s))") == 2.0
    assert run("(def s 1) ((fn () (set s 2))) s") == 1.0


def test_function_values(interp):
    fn, macro = interp.eval_source("(fn (x) x) (macro (x) x)")
    assert type(fn) is Lambda
    assert isinstance(macro, Macro)
    assert interp.eval_source("fn")[0] is SpecialForm.FN


def test_macro_binds_operands_unevaluated(interp):
    result = interp.eval_source("(def q (macro (x) (list 'quote x))) (q (undefined 1))")[-1]
    assert interp.serialize(result) == "(undefined 1)"


def test_macro_expansion_is_evaluated_once(interp):
    src = """
    (def unless (macro (c a b) (list 'if c b a)))
    (unless #f 1 2)
    """
    assert interp.eval_source(src)[-1] == 1.0
    # the expansion (quote (1 2)) is evaluated once, giving the list itself
    assert interp.eval_source("(def m (macro () ''(1 2))) (m)")[-1] == [1.0, 2.0]


def test_nested_quasiquote(interp):
    result = interp.eval_source("(def x 2) `(a `(b ,(c ,x)))")[-1]
    assert interp.serialize(result) == "(a (quasiquote (b (unquote (c 2)))))"


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("(undefined)", errors.UnboundSymbol, "Unbound symbol 'undefined'"),
        ("()", errors.EmptyApplication, "apply received empty form"),
        ("(1 2)", errors.NotApplicable, None),
        ("(def one 1) (one)", errors.NotApplicable, None),
        ('(+ 1 "a")', errors.RispTypeError, "Expected a number"),
        ("(if 1 2)", errors.RispTypeError, "Expected a bool"),
        ("((fn (x) x))", errors.ArityError, "fn (x) requires exactly 1 arguments, got 0"),
        ("(def f (fn (a &rest r) a)) (f)", errors.ArityError, "f (a &rest r) requires at least 1 arguments, got 0"),
        ("(= 1)", errors.ArityError, "= (o1 o2) requires exactly 2 arguments, got 1"),
        ("(quote)", errors.ArityError, "special form quote requires exactly 1 arguments, got 0"),
        ("(begin)", errors.ArityError, None),
        ("(fn (x))", errors.ArityError, None),
        ("(let ((x)) x)", errors.ArityError, None),
        ("(let (x) x)", errors.RispTypeError, "Expected a list"),
        ("(fn (1) x)", errors.RispTypeError, "Expected a symbol"),
        ("(fn (&rest) x)", errors.InvalidParamList, None),
        ("(fn (a &rest b c) a)", errors.InvalidParamList, None),
        ("(def 1 2)", errors.RispTypeError, None),
        ("(set 1 2)", errors.RispTypeError, None),
        ("(first '())", errors.RispTypeError, None),
        ("(first 1)", errors.RispTypeError, "Expected a list"),
        ("(= #t #t)", errors.RispTypeError, None),
        ("(= 1 'a)", errors.RispTypeError, "Expected a number"),
        ("(concat '(1) 2)", errors.RispTypeError, "Expected a list"),
        ("`,@(list 1)", errors.RispTypeError, None),
        ("`(a ,@1)", errors.RispTypeError, "unquote-splice must produce a list"),
    ],
)
def test_eval_errors(fails, source, error, message):
    err = fails(source, error)
    if message is not None:
        assert err.message == message
    assert not err.internal


def test_arity_checked_before_arguments_are_evaluated(fails):
    fails("(def f (fn (x) x)) (f (undefined) 2)", errors.ArityError)


def test_not_applicable_names_the_head(fails):
    err = fails("(def one 1) (one)", errors.NotApplicable)
    assert err.name == "one"
    assert err.value == 1.0


def test_failure_leaves_environment_balanced(interp, fails):
    fails("(let ((x 1)) ((fn (y) (let ((z 2)) (undefined))) 1))", errors.UnboundSymbol)
    assert interp.env.depth == 0
    assert interp.evaluator.call_depth == 0


def test_recursion_limit():
    interp = Interpreter(max_depth=10)
    with pytest.raises(errors.RecursionLimitExceeded) as info:
        interp.eval_source("(def f (fn (n) (f n))) (f 1)")
    assert info.value.limit == 10
    assert interp.evaluator.call_depth == 0
    assert interp.env.depth == 0


def test_recursion_limit_from_environment(monkeypatch):
    monkeypatch.setenv("RISP_MAX_DEPTH", "3")
    interp = Interpreter()
    assert interp.eval_source("(def f (fn (n) n)) (f (f (f 1)))")[-1] == 1.0
    with pytest.raises(errors.RecursionLimitExceeded):
        interp.eval_source("(def g (fn (n) (if (= n 0) 0 (g (- n 1))))) (g 5)")


def test_host_recursion_error_is_converted():
    interp = Interpreter(max_depth=0)
    with pytest.raises(errors.RecursionLimitExceeded) as info:
        interp.eval_source("(def f (fn (n) (f n))) (f 1)")
    assert info.value.limit is None
    assert info.value.message == "Host stack exhausted; evaluation nests too deeply"
    assert len(info.value.frames) == 1
    assert info.value.frames[0].label == "in"
    assert interp.env.depth == 0


COUNT_DOWN = "(def cnt (fn (n) (if (= n 0) 0 (+ 1 (cnt (- n 1))))))"
FACT = "(def fact (fn (n) (if (= n 0) 1 (* n (fact (- n 1))))))"


def test_default_depth_is_reachable(interp):
    limit = sys.getrecursionlimit()
    assert interp.max_depth == 200
    assert interp.eval_source(f"{FACT} (fact 150)")[-1] == pytest.approx(5.7133839564458575e262)
    assert interp.eval_source(f"{COUNT_DOWN} (cnt 195)")[-1] == 195.0
    with pytest.raises(errors.RecursionLimitExceeded) as info:
        interp.eval_source("(cnt 250)")
    assert info.value.limit == 200
    # the host limit is only raised while a form is evaluated
    assert sys.getrecursionlimit() == limit
