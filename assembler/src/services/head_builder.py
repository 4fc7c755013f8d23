"""
Builds the source -> synth head shared by every stage of a pipeline.
"""

from typing import Optional

from assembler.src.config import Settings, get_settings
from assembler.src.models.config import ResolvedConfig
from assembler.src.models.pipeline import (
    Artifact,
    Pipeline,
    SecretReference,
    SourceAction,
    SynthAction,
)

SOURCE_ARTIFACT = "source"
CLOUD_ASSEMBLY_ARTIFACT = "cloud_assembly"

def build_pipeline_head(
    resolved: ResolvedConfig,
    settings: Optional[Settings] = None,
) -> Pipeline:
    """
    Build a pipeline holding only its source and synth actions.
    Nothing is executed here; the commands are recorded for the build engine.
    """
    settings = settings or get_settings()

    source_artifact = Artifact(name=SOURCE_ARTIFACT)
    cloud_assembly_artifact = Artifact(name=CLOUD_ASSEMBLY_ARTIFACT)

    source_action = SourceAction(
        action_name=settings.source_action_name,
        owner=resolved.project_owner,
        repo=resolved.project_name,
        oauth_token=SecretReference(secret_name=resolved.token_secret_name),
        output=source_artifact,
    )

    synth_action = SynthAction(
        action_name=settings.synth_action_name,
        source_artifact=source_artifact,
        cloud_assembly_artifact=cloud_assembly_artifact,
        install_commands=list(resolved.install_commands),
        build_commands=list(resolved.build_commands),
        synth_command=resolved.synth_command,
        subdirectory=resolved.subdirectory,
    )

    return Pipeline(
        pipeline_name=resolved.pipeline_name,
        source_action=source_action,
        synth_action=synth_action,
    )
