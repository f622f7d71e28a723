"""
Chunked translation with phonetic annotation and audio.

Long text is cut into provider-sized chunks and translated one chunk at a
time. A chunk the provider keeps rejecting is passed through untranslated
(``DegradedResult``) instead of failing the whole request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Union

from ..errors import InvalidArgument, ProviderUnavailable
from ..models import ChunkTranslation, DegradedResult, TranslationResult
from ..text.chunker import chunk_text
from .audio import AudioSynthesisAssembler
from .phonetics import PhoneticAnnotator

logger = logging.getLogger(__name__)

CHUNK_CHARS = 800
MAX_ATTEMPTS = 3
BACKOFF_SECONDS = 1.0
CHUNK_DELAY_SECONDS = 0.2

ChunkOutcome = Union[ChunkTranslation, DegradedResult]


def _require(value: Optional[str], field: str) -> str:
	if not isinstance(value, str) or not value.strip():
		raise InvalidArgument(f"{field} is required")
	return value.strip()


class TranslationPipeline:
	def __init__(
		self,
		translator,
		annotator: PhoneticAnnotator,
		audio: AudioSynthesisAssembler,
		*,
		chunk_chars: int = CHUNK_CHARS,
		max_attempts: int = MAX_ATTEMPTS,
		backoff_seconds: float = BACKOFF_SECONDS,
		chunk_delay: float = CHUNK_DELAY_SECONDS,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	) -> None:
		self._translator = translator
		self._annotator = annotator
		self._audio = audio
		self.chunk_chars = chunk_chars
		self.max_attempts = max_attempts
		self.backoff_seconds = backoff_seconds
		self.chunk_delay = chunk_delay
		self._sleep = sleep

	async def translate_chunk(self, index: int, chunk: str, source_lang: str, target_lang: str) -> ChunkOutcome:
		"""Translate one chunk, retrying with linear backoff before passing it through."""
		last_error: Optional[ProviderUnavailable] = None
		for attempt in range(1, self.max_attempts + 1):
			try:
				text, romanization = await self._translator.translate(chunk, source_lang, target_lang)
				return ChunkTranslation(index=index, text=text, romanization=romanization)
			except ProviderUnavailable as err:
				last_error = err
				logger.warning(
					"Chunk translation failed",
					extra={
						"chunk_index": index,
						"attempt": attempt,
						"status": err.status_code,
						"error": err.detail,
					},
				)
				if attempt < self.max_attempts:
					await self._sleep(self.backoff_seconds * attempt)
		logger.error(
			"Passing chunk through untranslated",
			extra={"chunk_index": index, "attempts": self.max_attempts},
		)
		return DegradedResult(index=index, text=chunk, reason=str(last_error) if last_error else "unknown")

	async def translate_text(self, text: str, source_lang: str, target_lang: str) -> List[ChunkOutcome]:
		outcomes: List[ChunkOutcome] = []
		for index, chunk in enumerate(chunk_text(text, self.chunk_chars)):
			if index > 0:
				await self._sleep(self.chunk_delay)
			outcomes.append(await self.translate_chunk(index, chunk, source_lang, target_lang))
		return outcomes

	async def translate(self, text: str, source_lang: str, target_lang: str) -> TranslationResult:
		text = _require(text, "text")
		source_lang = _require(source_lang, "sourceLang").lower()
		target_lang = _require(target_lang, "targetLang").lower()

		outcomes = await self.translate_text(text, source_lang, target_lang)
		translated = " ".join(o.text for o in outcomes)
		degraded = tuple(o.index for o in outcomes if isinstance(o, DegradedResult))

		romanization: Optional[str] = None
		if target_lang != "en":
			readings = [o.romanization for o in outcomes if isinstance(o, ChunkTranslation) and o.romanization]
			romanization = " ".join(readings) or None

		source_ipa = await self._annotator.annotate(text) if source_lang == "en" else None
		target_ipa = await self._annotator.annotate(translated) if target_lang == "en" else None

		original_audio = await self._audio.synthesize(text, source_lang)
		translated_audio = await self._audio.synthesize(translated, target_lang)

		return TranslationResult(
			translated_text=translated,
			source_ipa=source_ipa,
			target_ipa=target_ipa,
			original_audio_base64=original_audio.audio_base64,
			translated_audio_base64=translated_audio.audio_base64,
			target_romanization=romanization,
			degraded_chunks=degraded,
			audio_degraded=original_audio.degraded or translated_audio.degraded,
		)
