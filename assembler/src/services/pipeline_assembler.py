"""
Pipeline assembler - turns a pipeline configuration into a pipeline graph.
"""

import logging
from typing import Optional, Union

from assembler.src.config import Settings, get_settings
from assembler.src.models.config import (
    GateTrigger,
    PipelineConfig,
    ResolvedConfig,
    GateSpec,
)
from assembler.src.models.pipeline import (
    Artifact,
    Pipeline,
    PipelineStage,
    ShellScriptAction,
    StageScope,
)
from assembler.src.services.head_builder import build_pipeline_head
from assembler.src.services.normalizer import normalize_config, validate_stages
from assembler.src.services.stack_builders import StackBuilder

logger = logging.getLogger(__name__)

class DelegationError(Exception):
    """Raised when a stack builder fails to materialize a stage."""

    def __init__(self, stage_name: str, message: str):
        super().__init__(f"Stack builder failed for stage '{stage_name}': {message}")
        self.stage_name = stage_name

def assemble_pipeline(
    config: Union[PipelineConfig, ResolvedConfig],
    stack_builder: StackBuilder,
    settings: Optional[Settings] = None,
) -> Pipeline:
    """
    Assemble a complete pipeline graph.

    Stages are produced in declaration order. The stack builder is called
    once per stage, before the stage is appended. The first-stage test gate
    lands on stage 0 only; the production test gate lands on the stage named
    like the production stage, if there is one.

    Raises ConfigurationError before any stage is built, or DelegationError
    as soon as the stack builder fails. No partial pipeline is returned.
    """
    settings = settings or get_settings()

    if isinstance(config, ResolvedConfig):
        resolved = config
    else:
        resolved = normalize_config(config, settings)

    first_stage_gate = resolved.gate_for(GateTrigger.BEFORE_FIRST_STAGE)
    production_gate = resolved.gate_for(GateTrigger.BEFORE_PRODUCTION)

    if resolved is config:
        validate_stages(
            resolved.stages,
            first_stage_gate.commands if first_stage_gate else None,
        )

    logger.info(
        f"Assembling pipeline {resolved.pipeline_name} "
        f"with {len(resolved.stages)} stages"
    )

    pipeline = build_pipeline_head(resolved, settings)
    source_artifact = pipeline.source_action.output

    seen_first = False
    for descriptor in resolved.stages:
        scope = StageScope(
            name=descriptor.name,
            account=descriptor.account,
            region=descriptor.region,
        )

        try:
            stack_builder(scope, descriptor.account, descriptor.region)
        except Exception as e:
            logger.error(f"Stack builder failed for stage {descriptor.name}: {e}")
            raise DelegationError(descriptor.name, str(e)) from e

        stage = pipeline.add_application_stage(scope)
        logger.debug(
            f"Added stage {stage.stage_name} ({stage.account}/{stage.region}) "
            f"with {len(scope.stacks)} stacks"
        )

        if not seen_first and first_stage_gate:
            attach_gate(stage, first_stage_gate, source_artifact)
        seen_first = True

        if production_gate and descriptor.name == resolved.prod_stage_name:
            attach_gate(stage, production_gate, source_artifact)

    logger.info(f"Pipeline {resolved.pipeline_name} assembled")
    return pipeline

def attach_gate(
    stage: PipelineStage,
    gate: GateSpec,
    source_artifact: Artifact,
) -> ShellScriptAction:
    """Append a test action after everything the stage already runs."""
    action = ShellScriptAction(
        action_name=gate.action_name,
        run_order=stage.next_sequential_run_order(),
        commands=list(gate.commands),
        additional_artifacts=[source_artifact],
    )
    stage.add_actions(action)
    logger.info(
        f"Attached {action.action_name} to stage {stage.stage_name} "
        f"at run order {action.run_order}"
    )
    return action
