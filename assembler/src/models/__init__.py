from assembler.src.models.config import (
    StageDescriptor,
    StageSettings,
    GithubSource,
    CommandSet,
    PipelineConfig,
    GateTrigger,
    GateSpec,
    ResolvedConfig,
)
from assembler.src.models.pipeline import (
    Artifact,
    SecretReference,
    SourceAction,
    SynthAction,
    StackDeployment,
    StageScope,
    DeployAction,
    ShellScriptAction,
    PipelineStage,
    Pipeline,
    GatePlacement,
    PipelineSummary,
)

__all__ = [
    "StageDescriptor",
    "StageSettings",
    "GithubSource",
    "CommandSet",
    "PipelineConfig",
    "GateTrigger",
    "GateSpec",
    "ResolvedConfig",
    "Artifact",
    "SecretReference",
    "SourceAction",
    "SynthAction",
    "StackDeployment",
    "StageScope",
    "DeployAction",
    "ShellScriptAction",
    "PipelineStage",
    "Pipeline",
    "GatePlacement",
    "PipelineSummary",
]
