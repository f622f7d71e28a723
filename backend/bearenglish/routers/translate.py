from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_translation_pipeline
from ..services.translation import TranslationPipeline

router = APIRouter(tags=["translate"])


class TranslateRequest(BaseModel):
	# Missing and empty fields are both rejected by the pipeline as 400
	text: Optional[str] = None
	source_lang: Optional[str] = Field(default=None, alias="sourceLang")
	target_lang: Optional[str] = Field(default=None, alias="targetLang")


class TranslateResponse(BaseModel):
	translated: str
	sourceIpa: Optional[str] = None
	ipa: Optional[str] = None
	targetPhonetic: Optional[str] = None
	originalAudio: str
	translatedAudio: str
	degraded: bool = False


@router.post("/translate", response_model=TranslateResponse)
async def translate(req: TranslateRequest, pipeline: TranslationPipeline = Depends(get_translation_pipeline)):
	result = await pipeline.translate(req.text, req.source_lang, req.target_lang)
	return TranslateResponse(
		translated=result.translated_text,
		sourceIpa=result.source_ipa,
		ipa=result.target_ipa,
		targetPhonetic=result.target_romanization,
		originalAudio=result.original_audio_base64,
		translatedAudio=result.translated_audio_base64,
		degraded=result.degraded,
	)
