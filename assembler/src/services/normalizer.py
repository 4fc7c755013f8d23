"""
Configuration normalizer - fills defaults and rejects unusable stage lists.
"""

import logging
from typing import Dict, List, Optional

from assembler.src.config import Settings, get_settings
from assembler.src.models.config import (
    GateTrigger,
    PipelineConfig,
    ResolvedConfig,
    StageDescriptor,
    GateSpec,
)
from assembler.src.services.config_parser import ConfigurationError

logger = logging.getLogger(__name__)

FIRST_STAGE_GATE_NAME = "tests"
PRODUCTION_GATE_NAME = "beforeProdTests"

def not_empty_string(value: Optional[str]) -> bool:
    return value is not None and len(value) > 0

def normalize_config(
    config: PipelineConfig,
    settings: Optional[Settings] = None,
) -> ResolvedConfig:
    """
    Resolve every optional field of a pipeline configuration.

    The bootstrap install command always comes first, followed by the
    caller's install commands. Empty strings for the credential reference
    or the subdirectory count as absent.

    Raises ConfigurationError for an empty stage list, an empty stage name
    or a duplicate stage name.
    """
    settings = settings or get_settings()
    commands = config.commands

    validate_stages(config.stage.stages, commands.before_non_prod_test_commands)

    install_commands = [settings.bootstrap_install_command]
    install_commands.extend(commands.install_commands)

    token_secret_name = config.github.token_in_secret_manager
    if not not_empty_string(token_secret_name):
        token_secret_name = settings.default_token_secret_name

    subdirectory = config.subdir
    if not not_empty_string(subdirectory):
        subdirectory = settings.default_subdirectory

    gates: List[GateSpec] = []
    if commands.before_non_prod_test_commands:
        gates.append(GateSpec(
            trigger=GateTrigger.BEFORE_FIRST_STAGE,
            action_name=FIRST_STAGE_GATE_NAME,
            commands=list(commands.before_non_prod_test_commands),
        ))
    if commands.before_prod_test_commands:
        gates.append(GateSpec(
            trigger=GateTrigger.BEFORE_PRODUCTION,
            action_name=PRODUCTION_GATE_NAME,
            commands=list(commands.before_prod_test_commands),
        ))

    prod_stage_name = config.stage.prod_stage_name
    stage_names = [s.name for s in config.stage.stages]
    if commands.before_prod_test_commands and prod_stage_name not in stage_names:
        logger.warning(
            f"Production stage {prod_stage_name!r} is not declared, "
            f"{PRODUCTION_GATE_NAME} will not be attached"
        )

    return ResolvedConfig(
        pipeline_name=f"{config.project_name}{settings.pipeline_name_suffix}",
        project_name=config.project_name,
        project_owner=config.github.project_owner,
        token_secret_name=token_secret_name,
        subdirectory=subdirectory,
        install_commands=install_commands,
        build_commands=list(commands.build_commands),
        synth_command=settings.synth_command,
        prod_stage_name=prod_stage_name,
        stages=[s.model_copy() for s in config.stage.stages],
        gates=gates,
    )

def validate_stages(
    stages: List[StageDescriptor],
    before_first_stage_commands: Optional[List[str]] = None,
) -> None:
    """Validate the declared stage list."""
    if len(stages) == 0:
        if before_first_stage_commands:
            raise ConfigurationError(
                "Tests before the first stage are configured but no stage is declared",
                field="commands.before_non_prod_test_commands",
            )
        raise ConfigurationError(
            "Pipeline must have at least one stage",
            field="stage.stages",
        )

    seen: Dict[str, int] = {}
    for i, stage in enumerate(stages):
        if not not_empty_string(stage.name):
            raise ConfigurationError(
                f"Stage {i} 'name' must be a non-empty string",
                field=f"stage.stages[{i}].name",
            )
        if stage.name in seen:
            raise ConfigurationError(
                f"Stage {i} duplicates name '{stage.name}' of stage {seen[stage.name]}",
                field=f"stage.stages[{i}].name",
            )
        seen[stage.name] = i
