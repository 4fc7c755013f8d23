"""
Renders an assembled pipeline for the execution engine.
"""

import yaml
from typing import Any, Dict

from assembler.src.models.pipeline import GatePlacement, Pipeline, PipelineSummary

def pipeline_to_dict(pipeline: Pipeline) -> Dict[str, Any]:
    """Plain dict form of the graph, stage and action order preserved."""
    return pipeline.model_dump(mode="json")

def render_pipeline_yaml(pipeline: Pipeline) -> str:
    return yaml.safe_dump(pipeline_to_dict(pipeline), sort_keys=False)

def summarize_pipeline(pipeline: Pipeline) -> PipelineSummary:
    """
    Short description of the pipeline: stages in order and where each
    test gate was attached.
    """
    stages = [stage.stage_name for stage in pipeline.stages]
    actions_count = sum(len(stage.actions) for stage in pipeline.stages)

    gates = [
        GatePlacement(
            stage_name=stage.stage_name,
            action_name=action.action_name,
            run_order=action.run_order,
        )
        for stage in pipeline.stages
        for action in stage.shell_actions()
    ]

    description = (
        f"Pipeline {pipeline.pipeline_name}: {pipeline.source_action.action_name} -> "
        f"{pipeline.synth_action.action_name} -> {' -> '.join(stages)}"
    )
    if gates:
        description += ". Gates: " + ", ".join(
            f"{g.action_name}@{g.stage_name}" for g in gates
        )

    return PipelineSummary(
        pipeline_name=pipeline.pipeline_name,
        stages_count=len(stages),
        actions_count=actions_count,
        stages=stages,
        gates=gates,
        description=description,
    )
