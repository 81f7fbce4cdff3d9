"""
SIE to SRU API.

Wraps the converter in a small FastAPI service: clients upload a base64
encoded SIE export and receive INFO.sru and BLANKETTER.sru as text.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from siesru import __version__
from siesru.config import Settings, settings
from siesru.api.routes import sru, health
from siesru.services.sie_file_service import FileProcessingError
from siesru.svensk_ekonomi import SIEParseError

logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start on an unsafe production config, then report SRU output settings."""
    config: Settings = app.state.settings
    try:
        config.validate_production_config()
    except ValueError as e:
        logger.error(f"❌ Configuration validation failed: {e}")
        raise

    logger.info(
        f"🧾 SIE to SRU {__version__} ready (ENV={config.ENV}): "
        f"SIE {config.SIE_ENCODING} in, SRU {config.SRU_ENCODING}/{config.SRU_LINE_ENDING} out, "
        f"timestamps in {config.SRU_TIMEZONE}"
    )
    yield
    logger.info("🛑 SIE to SRU API stopped")


def setup_exception_handlers(app: FastAPI) -> None:
    """Map conversion errors to 400 (unreadable upload) and 422 (invalid SIE content)."""

    @app.exception_handler(FileProcessingError)
    async def file_processing_error_handler(request: Request, exc: FileProcessingError) -> JSONResponse:
        logger.warning(f"⚠️ Rejected upload on {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(SIEParseError)
    async def sie_parse_error_handler(request: Request, exc: SIEParseError) -> JSONResponse:
        logger.warning(f"⚠️ Invalid SIE on {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(
        title="SIE to SRU API",
        description="Converts SIE bookkeeping exports into INK2/INK2R/INK2S SRU files",
        version=__version__,
        debug=config.DEBUG,
        lifespan=lifespan
    )
    app.state.settings = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["POST", "GET"],
        allow_headers=["content-type"],
    )

    setup_exception_handlers(app)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(sru.router, prefix=f"{API_V1_PREFIX}/sru", tags=["sru"])

    @app.get("/")
    async def root():
        return {
            "service": "SIE to SRU API",
            "version": __version__,
            "forms": ["INK2", "INK2R", "INK2S"],
            "endpoints": {
                "health": "/health",
                "sru_convert": f"{API_V1_PREFIX}/sru/convert"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="debug" if settings.DEBUG else "info"
    )
