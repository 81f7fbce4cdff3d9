"""
Health check: service status plus the SRU output format this instance renders.
"""
from fastapi import APIRouter, Request

from siesru import __version__

router = APIRouter()


@router.get("")
async def health_check(request: Request):
    config = request.app.state.settings
    return {
        "status": "healthy",
        "service": "sie-sru-api",
        "version": __version__,
        "sru": {
            "encoding": config.SRU_ENCODING,
            "line_ending": config.SRU_LINE_ENDING,
            "timezone": config.SRU_TIMEZONE,
        },
    }
