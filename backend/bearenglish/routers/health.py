import logging

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health(request: Request):
	state = request.app.state
	redis_ok = False
	redis_client = getattr(state, "redis", None)
	if redis_client is not None:
		try:
			redis_ok = bool(await redis_client.ping())
		except Exception as e:
			logger.warning("Redis ping failed", extra={"error": str(e)})
	gemini = getattr(state, "gemini", None)
	return {
		"status": "ok",
		"gemini_configured": bool(gemini is not None and gemini.configured),
		"redis": redis_ok,
	}
