import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from ..deps import get_pronunciation_assessor
from ..errors import InvalidArgument, ProviderUnavailable, TranscriptionFailed, TranscriptionTimeout
from ..services.pronunciation import PronunciationAssessor

router = APIRouter(tags=["pronunciation"])
logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str, error: str) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={"success": False, "message": message, "error": error})


@router.post("/pronunciation")
async def check_pronunciation(
	referenceText: Optional[str] = Form(default=None),
	audio: Optional[UploadFile] = File(default=None),
	assessor: PronunciationAssessor = Depends(get_pronunciation_assessor),
):
	"""Transcribe the uploaded recording and score it against ``referenceText``."""
	payload = await audio.read() if audio is not None else b""
	filename = audio.filename if audio is not None else None
	try:
		result = await assessor.assess(referenceText or "", payload, filename=filename)
	except InvalidArgument as e:
		return _failure(400, "Invalid request", str(e))
	except TranscriptionTimeout as e:
		return _failure(504, "Transcription timed out", e.message)
	except TranscriptionFailed as e:
		return _failure(502, f"Transcription {e.status}", e.message)
	except ProviderUnavailable as e:
		logger.error("Transcription provider unavailable", extra={"status": e.status_code, "error": e.detail})
		return _failure(502, "Transcription service unavailable", str(e))
	except Exception as e:
		logger.exception("Pronunciation check failed")
		return _failure(500, "Pronunciation check failed", str(e))
	finally:
		if audio is not None:
			await audio.close()

	return {
		"success": True,
		"transcription": result.transcription,
		"duration_seconds": result.duration_seconds,
		"aai_id": result.job_id,
		"accuracy_percentage": result.accuracy_percentage,
	}
