"""Tests for the ordered, fail-fast, check-then-act runner."""

import pytest

from workstation_setup.errors import CommandFailed, ConfigError, StepFailure
from workstation_setup.pipeline import RunContext, Step, run_pipeline


class Machine:
    """A toy environment: a set of facts that actions establish."""

    def __init__(self, facts=()):
        self.facts = set(facts)
        self.actions = []

    def establish(self, name):
        def action(ctx):
            self.actions.append(name)
            self.facts.add(name)
        return action

    def holds(self, name):
        return lambda ctx: name in self.facts

    def step(self, name, checked=True):
        return Step(name, self.establish(name), check=self.holds(name) if checked else None)


def _boom(exc):
    def action(ctx):
        raise exc
    return action


def test_steps_run_in_declaration_order(ctx):
    m = Machine()
    result = run_pipeline(ctx=ctx, steps=[m.step("a"), m.step("b"), m.step("c")])

    assert m.actions == ["a", "b", "c"]
    assert result.ran_steps == ["a", "b", "c"]
    assert result.skipped_steps == []


def test_satisfied_check_skips_action(ctx):
    m = Machine(facts={"b"})
    result = run_pipeline(ctx=ctx, steps=[m.step("a"), m.step("b"), m.step("c")])

    assert m.actions == ["a", "c"]
    assert result.skipped_steps == ["b"]


def test_step_without_check_always_runs(ctx):
    m = Machine(facts={"a"})
    run_pipeline(ctx=ctx, steps=[m.step("a", checked=False)])
    assert m.actions == ["a"]


def test_second_run_converges_without_actions(ctx):
    m = Machine()
    steps = [m.step("a"), m.step("b"), m.step("c")]

    run_pipeline(ctx=ctx, steps=steps)
    facts_after_first = set(m.facts)
    second = run_pipeline(ctx=ctx, steps=steps)

    assert m.facts == facts_after_first
    assert m.actions == ["a", "b", "c"]
    assert second.skipped_steps == ["a", "b", "c"]


def test_failure_stops_later_steps(ctx):
    m = Machine()
    steps = [m.step("a"), Step("b", _boom(RuntimeError("nope"))), m.step("c")]

    with pytest.raises(StepFailure) as excinfo:
        run_pipeline(ctx=ctx, steps=steps)

    assert excinfo.value.step_id == "b"
    assert isinstance(excinfo.value.cause, RuntimeError)
    assert excinfo.value.exit_code == 1
    assert m.actions == ["a"]


def test_failing_check_is_a_step_failure(ctx):
    m = Machine()

    def bad_check(ctx):
        raise OSError("cannot read")

    steps = [Step("a", m.establish("a"), check=bad_check), m.step("b")]
    with pytest.raises(StepFailure) as excinfo:
        run_pipeline(ctx=ctx, steps=steps)

    assert excinfo.value.step_id == "a"
    assert m.actions == []


def test_exit_code_propagates_from_tool(ctx):
    steps = [Step("a", _boom(CommandFailed(["apt-get", "install"], 100)))]
    with pytest.raises(StepFailure) as excinfo:
        run_pipeline(ctx=ctx, steps=steps)
    assert excinfo.value.exit_code == 100


def test_start_at_and_stop_after(ctx):
    m = Machine()
    steps = [m.step("a"), m.step("b"), m.step("c"), m.step("d")]

    result = run_pipeline(ctx=ctx, steps=steps, start_at="b", stop_after="c")

    assert m.actions == ["b", "c"]
    assert result.ran_steps == ["b", "c"]


def test_unknown_bound_is_rejected_before_running(ctx):
    m = Machine()
    with pytest.raises(ConfigError):
        run_pipeline(ctx=ctx, steps=[m.step("a")], stop_after="zzz")
    assert m.actions == []


def test_force_ignores_checks(ctx):
    m = Machine(facts={"a"})
    run_pipeline(ctx=ctx, steps=[m.step("a")], force=True)
    assert m.actions == ["a"]
