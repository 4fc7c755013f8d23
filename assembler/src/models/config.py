"""
Pipeline configuration models.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

class StageDescriptor(BaseModel):
    name: str
    account: str
    region: str

class StageSettings(BaseModel):
    prod_stage_name: Optional[str] = None
    stages: List[StageDescriptor] = Field(default_factory=list)

class GithubSource(BaseModel):
    project_owner: str
    token_in_secret_manager: Optional[str] = None

class CommandSet(BaseModel):
    install_commands: List[str] = Field(default_factory=list)
    build_commands: List[str] = Field(default_factory=list)
    before_non_prod_test_commands: List[str] = Field(default_factory=list)
    before_prod_test_commands: List[str] = Field(default_factory=list)

class PipelineConfig(BaseModel):
    project_name: str
    github: GithubSource
    stage: StageSettings
    commands: CommandSet = Field(default_factory=CommandSet)
    subdir: Optional[str] = None

class GateTrigger(str, Enum):
    BEFORE_FIRST_STAGE = "before_first_stage"
    BEFORE_PRODUCTION = "before_production"

class GateSpec(BaseModel):
    trigger: GateTrigger
    action_name: str
    commands: List[str]

class ResolvedConfig(BaseModel):
    """
    Configuration with every default filled in.

    Produced once by the normalizer and consumed once by the assembler.
    Only gates with a non-empty command list are present in ``gates``.
    """

    pipeline_name: str
    project_name: str
    project_owner: str
    token_secret_name: str
    subdirectory: str
    install_commands: List[str]
    build_commands: List[str]
    synth_command: str
    prod_stage_name: Optional[str] = None
    stages: List[StageDescriptor]
    gates: List[GateSpec] = Field(default_factory=list)

    def gate_for(self, trigger: GateTrigger) -> Optional[GateSpec]:
        for gate in self.gates:
            if gate.trigger == trigger:
                return gate
        return None
