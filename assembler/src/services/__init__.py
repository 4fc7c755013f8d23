from assembler.src.services.config_parser import (
    parse_pipeline_config,
    parse_pipeline_dict,
    load_pipeline_config,
    find_pipeline_config,
    ConfigurationError,
)
from assembler.src.services.normalizer import normalize_config, validate_stages
from assembler.src.services.head_builder import build_pipeline_head
from assembler.src.services.stack_builders import StackBuilder, static_stack_builder
from assembler.src.services.pipeline_assembler import (
    assemble_pipeline,
    attach_gate,
    DelegationError,
)
from assembler.src.services.renderer import (
    pipeline_to_dict,
    render_pipeline_yaml,
    summarize_pipeline,
)

__all__ = [
    "parse_pipeline_config",
    "parse_pipeline_dict",
    "load_pipeline_config",
    "find_pipeline_config",
    "ConfigurationError",
    "normalize_config",
    "validate_stages",
    "build_pipeline_head",
    "StackBuilder",
    "static_stack_builder",
    "assemble_pipeline",
    "attach_gate",
    "DelegationError",
    "pipeline_to_dict",
    "render_pipeline_yaml",
    "summarize_pipeline",
]
