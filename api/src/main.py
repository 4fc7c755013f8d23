import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.src.config import get_settings
from api.src.routes import health_router, pipelines_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Pipeline Assembler API")
    yield
    logger.info("Shutting down Pipeline Assembler API")

app = FastAPI(
    title="Pipeline Assembler",
    description="Continuous-delivery pipeline assembly from declarative stage lists",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(pipelines_router, prefix="/api")

@app.get("/")
async def root():
    return {
        "name": "Pipeline Assembler",
        "version": "0.1.0",
        "docs": "/docs"
    }
