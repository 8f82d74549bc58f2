import pytest
from hypothesis import given, strategies as st

from shallot import errors
from shallot.builtin.reference_builtin import deref, new, reset
from shallot.types.environment import Environment
from shallot.types.reference import Reference

values = st.one_of(
    st.integers(min_value=-1000, max_value=1000).map(float),
    st.text(max_size=10),
    st.booleans(),
)


def test_new_and_deref(run):
    assert run("(deref (new 5))") == 5
    assert run("(ref? (new 5))") is True
    assert run("(ref? 5)") is False


def test_aliases_share_one_cell(run):
    run("(def a (new 1)) (def b a)")
    run("(reset! a 2)")
    assert run("(deref b)") == 2


def test_fresh_cells_are_independent(run):
    run("(def a (new 1)) (def b (new 1))")
    run("(reset! a 2)")
    assert run("(deref b)") == 1


def test_closure_sees_writes_through_captured_reference(run):
    run("(def counter (new 0))")
    run("(defun bump () (reset! counter (+ (deref counter) 1)))")
    run("(bump) (bump) (bump)")
    assert run("(deref counter)") == 3


def test_reset_returns_new_value(run):
    assert run("(reset! (new 1) 9)") == 9


@pytest.mark.parametrize("source", ["(deref 5)", "(reset! nil 1)", '(deref "x")'])
def test_not_a_reference(run, source):
    with pytest.raises(errors.NotAReference):
        run(source)


@pytest.mark.parametrize("source", ["(new)", "(new 1 2)", "(deref)", "(reset! (new 1))"])
def test_reference_builtin_arity(run, source):
    with pytest.raises(errors.ArityError):
        run(source)


@given(values, values)
def test_aliasing_law(v1, v2):
    # r2 = r1; mutate(r1, v2) => deref(r2) == v2
    env = Environment()
    r1 = new(env, [v1])
    r2 = r1
    reset(env, [r1, v2])
    assert deref(env, [r2]) == v2
    assert isinstance(r2, Reference)
