import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .deps import build_services, close_services
from .errors import InvalidArgument, ProviderUnavailable
from .logging_setup import setup_logging
from .settings import settings
from .routers import health, chat, translate, pronunciation

logger = logging.getLogger(__name__)

app = FastAPI(title="Bear English Utilities API")
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(translate.router)
app.include_router(pronunciation.router)


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
	return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ProviderUnavailable)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailable):
	logger.error(
		"Provider unavailable",
		extra={"path": request.url.path, "provider": exc.provider, "status": exc.status_code, "error": exc.detail},
	)
	return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event():
	setup_logging(settings.log_level, json_lines=settings.log_json)
	build_services(app.state, settings)
	logger.info("Services ready", extra={"gemini_configured": bool(settings.gemini_api_key)})


@app.on_event("shutdown")
async def shutdown_event():
	await close_services(app.state)
