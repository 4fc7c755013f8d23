from api.src.models.assembly import AssembleRequest, AssembleResponse

__all__ = [
    "AssembleRequest",
    "AssembleResponse",
]
