import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.agent.llm_client import LLMClient
from app.api.main import api_router
from app.core.config import settings
from app.core.db import build_engine, init_db
from app.core.errors import InputValidationError, MagnetizeError, UpstreamError
from app.emails import HelpRequestMailer

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine()
    init_db(engine)
    app.state.engine = engine
    app.state.llm = LLMClient()
    app.state.mailer = HelpRequestMailer()
    if not app.state.mailer.enabled:
        logger.warning("RESEND_API_KEY not set; help request emails are disabled.")
    logger.info("Startup complete (environment=%s).", settings.ENVIRONMENT)
    try:
        yield
    finally:
        await app.state.llm.client.close()
        engine.dispose()
        logger.info("Shutdown complete.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)


@app.exception_handler(MagnetizeError)
async def magnetize_error_handler(request: Request, exc: MagnetizeError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        # Internal detail goes to the log only; the client gets the generic message.
        logger.error(
            "%s %s failed: %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.default_message})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=InputValidationError.status_code, content={"detail": errors})


if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "local")
