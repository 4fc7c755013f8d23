from pydantic import BaseModel, Field
from typing import List

from assembler.src.models.config import PipelineConfig
from assembler.src.models.pipeline import Pipeline, PipelineSummary

class AssembleRequest(BaseModel):
    config: PipelineConfig
    stacks: List[str] = Field(default_factory=list)

class AssembleResponse(BaseModel):
    pipeline: Pipeline
    summary: PipelineSummary
