"""
Pipeline assembly endpoints.
"""

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from typing import List
import logging

from assembler.src.models.config import PipelineConfig, ResolvedConfig
from assembler.src.services import (
    ConfigurationError,
    DelegationError,
    assemble_pipeline,
    normalize_config,
    parse_pipeline_config,
    render_pipeline_yaml,
    static_stack_builder,
    summarize_pipeline,
)
from api.src.models.assembly import AssembleRequest, AssembleResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pipelines", tags=["pipelines"])

def _assemble(config: PipelineConfig, stacks: List[str]):
    try:
        return assemble_pipeline(config, static_stack_builder(stacks))
    except ConfigurationError as e:
        logger.warning(f"Rejected pipeline configuration: {e}")
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "field": e.field},
        )
    except DelegationError as e:
        raise HTTPException(
            status_code=502,
            detail={"error": str(e), "stage": e.stage_name},
        )

@router.post("/assemble", response_model=AssembleResponse)
async def assemble(request: AssembleRequest):
    """Assemble a pipeline graph from a JSON configuration."""
    pipeline = _assemble(request.config, request.stacks)
    return AssembleResponse(
        pipeline=pipeline,
        summary=summarize_pipeline(pipeline),
    )

@router.post("/render", response_class=PlainTextResponse)
async def render(request: Request, stacks: List[str] = Query(default=[])):
    """Assemble a pipeline from a YAML configuration and return it as YAML."""
    body = await request.body()

    try:
        config = parse_pipeline_config(body)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "field": e.field},
        )

    pipeline = _assemble(config, stacks)
    return PlainTextResponse(render_pipeline_yaml(pipeline), media_type="text/yaml")

@router.post("/validate", response_model=ResolvedConfig)
async def validate(config: PipelineConfig):
    """Resolve defaults without building anything."""
    try:
        return normalize_config(config)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "field": e.field},
        )
