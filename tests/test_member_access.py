import pytest

from shallot import errors
from shallot.builtin.member_builtin import bind_method, member_read, member_write
from shallot.types.builtin import Builtin
from shallot.types.closure import Closure
from shallot.types.environment import Environment
from shallot.types.reference import Reference
from shallot.types.symbol import SELF, Symbol
from shallot.types.values import to_str

x, y = Symbol("x"), Symbol("y")


def test_read_field(run):
    run("(def p (new [x 10 y 20]))")
    assert run("p.x") == 10
    assert run("(. p y)") == 20


def test_write_field_renders_updated_map(run):
    run("(= p1 (new [x 10 y 10]))")
    run("(= p1.x 5)")
    assert to_str(run("p1")) == "[x 5 y 10]"


def test_write_is_seen_through_every_alias(run):
    run("(= p1 (new [x 10 y 10]))")
    run("(= p2 p1)")
    run("(= p1.y 99)")
    assert run("p2.y") == 99


def test_write_returns_assigned_value(run):
    run("(def p (new [x 1]))")
    assert run("(= p.x 7)") == 7
    assert run("(. p x 8)") == 8
    assert run("p.x") == 8


def test_write_adds_missing_key_at_end(run):
    run("(def p (new [x 1]))")
    run("(= p.y 2)")
    assert to_str(run("p")) == "[x 1 y 2]"


def test_write_does_not_touch_earlier_map_value(run):
    run("(def snapshot [x 1])")
    run("(def p (new snapshot))")
    run("(= p.x 2)")
    assert run("snapshot") == {x: 1}


def test_nested_member_path(run):
    run("(def outer (new [inner (new [v 1])]))")
    assert run("outer.inner.v") == 1
    run("(= outer.inner.v 3)")
    assert run("(deref (. outer inner))") == {Symbol("v"): 3}


def test_computed_keys(run):
    run('(def m (new ["a" 1 2 "two"]))')
    assert run('(. m "a")') == 1
    assert run("(. m (+ 1 1))") == "two"
    assert run('(get-member m "a")') == 1
    run('(set-member! m "b" 5)')
    assert run('(has-member? m "b")') is True
    assert run('(has-member? m "zzz")') is False
    run('(set-member! m (+ 1 2) "three")')
    assert run("(. m 3)") == "three"


def test_missing_member(run):
    run("(def p (new [x 1]))")
    with pytest.raises(errors.NoSuchMember):
        run("p.zzz")


@pytest.mark.parametrize("source", ["(. 5 x)", "(. [x 1] x)", "(= (. nil x) 1)"])
def test_member_access_needs_reference(run, source):
    with pytest.raises(errors.NotAReference):
        run(source)


def test_member_access_needs_map_contents(run):
    run("(def r (new 5))")
    with pytest.raises(errors.TypeMismatch):
        run("r.x")
    with pytest.raises(errors.TypeMismatch):
        run("(= r.x 1)")


def test_method_self_binding_mutates_receiver(run):
    run("(def p (new [x 1 bump (fun () (= self.x (+ self.x 1)))]))")
    run("(p.bump) (p.bump)")
    assert run("p.x") == 3


def test_method_rebinds_to_latest_receiver(run):
    run("(def a (new [n 1 get (fun () self.n)]))")
    run("(def b (new [n 2 get a.get]))")
    # `a.get` was bound to `a` when read, then bound again to `b` when read off b
    assert run("(a.get)") == 1
    assert run("(b.get)") == 2


def test_non_function_members_are_not_wrapped():
    ref = Reference({x: 1.0})
    assert bind_method(1.0, ref, Environment()) == 1.0


def test_bind_closure_seeds_self_in_fresh_frame():
    captured = Environment()
    fn = Closure([], SELF, captured)
    ref = Reference({x: fn})
    bound = member_read(ref, x, Environment())
    assert isinstance(bound, Closure)
    assert bound.env.outer is captured
    assert bound.env.lookup(SELF) is ref
    assert SELF not in captured.vars


def test_bind_builtin_receives_self_through_env():
    who = Builtin(lambda env, args: env.lookup(SELF), "who")
    ref = Reference({Symbol("who"): who})
    bound = member_read(ref, Symbol("who"), Environment())
    assert bound is not who
    assert bound(Environment(), []) is ref


def test_member_write_replaces_cell_contents():
    before = {x: 1.0}
    ref = Reference(before)
    member_write(ref, x, 2.0)
    assert ref.deref() == {x: 2.0}
    assert before == {x: 1.0}


def test_bool_and_number_keys_stay_apart(run):
    run('(def m (new [1 "one" 0 "zero"]))')
    assert run("(has-member? m true)") is False
    assert run("(has-member? m false)") is False
    assert run("(has-member? m 1)") is True
    with pytest.raises(errors.TypeMismatch):
        run("(. m true)")
    with pytest.raises(errors.TypeMismatch):
        run("(set-member! m false 2)")
    assert to_str(run("m")) == "[1 one 0 zero]"
