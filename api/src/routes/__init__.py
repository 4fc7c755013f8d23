from api.src.routes.health import router as health_router
from api.src.routes.pipelines import router as pipelines_router

__all__ = ["health_router", "pipelines_router"]
