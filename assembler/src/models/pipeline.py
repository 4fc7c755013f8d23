"""
Pipeline graph models.

The graph records what the execution engine will run later: one source
action, one synth action and an ordered list of stages, each with its own
ordered actions.
"""

from pydantic import BaseModel, Field, PrivateAttr
from typing import Annotated, List, Literal, Union

class Artifact(BaseModel):
    name: str

class SecretReference(BaseModel):
    secret_name: str

class SourceAction(BaseModel):
    action_name: str
    owner: str
    repo: str
    oauth_token: SecretReference
    output: Artifact

class SynthAction(BaseModel):
    action_name: str
    source_artifact: Artifact
    cloud_assembly_artifact: Artifact
    install_commands: List[str]
    build_commands: List[str]
    synth_command: str
    subdirectory: str

class StackDeployment(BaseModel):
    stack_name: str
    account: str
    region: str

class StageScope(BaseModel):
    """
    Stage handle handed to a stack builder.

    Stacks count only when added through ``add_stack``. The stage identity
    cannot be changed by the builder.
    """

    name: str = Field(frozen=True)
    account: str = Field(frozen=True)
    region: str = Field(frozen=True)
    stacks: List[StackDeployment] = Field(default_factory=list)

    def add_stack(self, stack_name: str) -> StackDeployment:
        stack = StackDeployment(
            stack_name=stack_name,
            account=self.account,
            region=self.region,
        )
        self.stacks.append(stack)
        return stack

class DeployAction(BaseModel):
    type: Literal["deploy"] = "deploy"
    action_name: str
    run_order: int
    stack_name: str
    mode: Literal["prepare", "execute"]

class ShellScriptAction(BaseModel):
    type: Literal["shell"] = "shell"
    action_name: str
    run_order: int
    commands: List[str]
    additional_artifacts: List[Artifact] = Field(default_factory=list)

StageAction = Annotated[
    Union[DeployAction, ShellScriptAction],
    Field(discriminator="type"),
]

class PipelineStage(BaseModel):
    stage_name: str
    account: str
    region: str
    actions: List[StageAction] = Field(default_factory=list)

    _next_run_order: int = PrivateAttr(default=1)

    def next_sequential_run_order(self, count: int = 1) -> int:
        """
        Reserve ``count`` consecutive run orders and return the first one.

        Never hands out a run order at or below one the stage's actions
        already use, including after the stage was re-validated from a dump.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        used = max((a.run_order for a in self.actions), default=0)
        run_order = max(self._next_run_order, used + 1)
        self._next_run_order = run_order + count
        return run_order

    def add_actions(self, *actions: Union[DeployAction, ShellScriptAction]) -> None:
        self.actions.extend(actions)

    def add_stack_deployment(self, stack: StackDeployment) -> None:
        # Prepare (change set) runs one step before execute
        run_order = self.next_sequential_run_order(2)
        self.add_actions(
            DeployAction(
                action_name=f"{stack.stack_name}.Prepare",
                run_order=run_order,
                stack_name=stack.stack_name,
                mode="prepare",
            ),
            DeployAction(
                action_name=f"{stack.stack_name}.Deploy",
                run_order=run_order + 1,
                stack_name=stack.stack_name,
                mode="execute",
            ),
        )

    def shell_actions(self) -> List[ShellScriptAction]:
        return [a for a in self.actions if isinstance(a, ShellScriptAction)]

class Pipeline(BaseModel):
    pipeline_name: str
    source_action: SourceAction
    synth_action: SynthAction
    stages: List[PipelineStage] = Field(default_factory=list)

    def add_application_stage(self, scope: StageScope) -> PipelineStage:
        """Append a deployment stage for every stack the scope holds."""
        stage = PipelineStage(
            stage_name=scope.name,
            account=scope.account,
            region=scope.region,
        )
        for stack in scope.stacks:
            stage.add_stack_deployment(stack)
        self.stages.append(stage)
        return stage

    def stage(self, stage_name: str) -> PipelineStage:
        for stage in self.stages:
            if stage.stage_name == stage_name:
                return stage
        raise KeyError(stage_name)

class GatePlacement(BaseModel):
    stage_name: str
    action_name: str
    run_order: int

class PipelineSummary(BaseModel):
    pipeline_name: str
    stages_count: int
    actions_count: int
    stages: List[str]
    gates: List[GatePlacement]
    description: str
