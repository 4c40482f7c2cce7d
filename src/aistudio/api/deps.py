"""FastAPI dependencies."""

from fastapi import Depends, HTTPException, Request

from aistudio.engine import FeatureFacade, UnknownFeature
from aistudio.studio import Studio


def get_studio(request: Request) -> Studio:
    """Return the studio created by the application lifespan."""
    studio = getattr(request.app.state, "studio", None)
    if studio is None:
        raise HTTPException(status_code=503, detail="Studio is not initialized")
    return studio


def get_facade(feature: str, studio: Studio = Depends(get_studio)) -> FeatureFacade:
    """Resolve the ``{feature}`` path parameter to its facade."""
    try:
        return studio.facade(feature)
    except UnknownFeature as e:
        raise HTTPException(status_code=404, detail={"code": e.code, "message": e.message})
