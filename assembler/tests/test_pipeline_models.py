"""Tests for pipeline graph models."""

import pytest
from pydantic import ValidationError
from assembler.src.models.config import GateSpec, GateTrigger
from assembler.src.models.pipeline import (
    Artifact,
    PipelineStage,
    ShellScriptAction,
    StageScope,
)
from assembler.src.services.pipeline_assembler import attach_gate

def make_stage():
    return PipelineStage(stage_name="dev", account="1", region="us-east-1")

def test_run_orders_start_at_one():
    stage = make_stage()
    assert stage.next_sequential_run_order() == 1
    assert stage.next_sequential_run_order() == 2

def test_run_order_reservation():
    stage = make_stage()
    assert stage.next_sequential_run_order(3) == 1
    assert stage.next_sequential_run_order() == 4

def test_run_order_count_must_be_positive():
    with pytest.raises(ValueError, match="at least 1"):
        make_stage().next_sequential_run_order(0)

def test_stack_deployment_consumes_two_run_orders():
    scope = StageScope(name="dev", account="1", region="us-east-1")
    stack = scope.add_stack("dev-app")
    stage = make_stage()
    stage.add_stack_deployment(stack)

    assert [(a.mode, a.run_order) for a in stage.actions] == [("prepare", 1), ("execute", 2)]
    assert stage.next_sequential_run_order() == 3

def test_stage_scope_stacks_inherit_environment():
    scope = StageScope(name="prod", account="2", region="eu-west-1")
    stack = scope.add_stack("prod-app")
    assert (stack.account, stack.region) == ("2", "eu-west-1")
    assert scope.stacks == [stack]

def test_shell_actions_filter():
    stage = make_stage()
    stage.add_actions(ShellScriptAction(action_name="tests", run_order=1, commands=["npm test"]))
    assert [a.action_name for a in stage.shell_actions()] == ["tests"]

def test_run_orders_continue_after_revalidation():
    scope = StageScope(name="dev", account="1", region="us-east-1")
    stage = make_stage()
    stage.add_stack_deployment(scope.add_stack("dev-app"))

    restored = PipelineStage.model_validate(stage.model_dump())
    gate = GateSpec(trigger=GateTrigger.BEFORE_FIRST_STAGE, action_name="tests", commands=["npm test"])
    attach_gate(restored, gate, Artifact(name="source"))

    assert [a.run_order for a in restored.actions] == [1, 2, 3]
    assert restored.next_sequential_run_order() == 4

def test_run_orders_skip_existing_actions():
    stage = make_stage()
    stage.add_actions(ShellScriptAction(action_name="lint", run_order=5, commands=["npm run lint"]))
    assert stage.next_sequential_run_order() == 6

def test_stage_scope_identity_is_frozen():
    scope = StageScope(name="dev", account="1", region="us-east-1")
    with pytest.raises(ValidationError):
        scope.name = "prod"
    assert scope.name == "dev"
