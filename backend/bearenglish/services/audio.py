from __future__ import annotations

import asyncio
import base64
import logging
import re
from typing import Awaitable, Callable, List

from ..errors import ProviderUnavailable
from ..models import SynthesisResult
from ..text.chunker import chunk_text

logger = logging.getLogger(__name__)

SINGLE_REQUEST_CHARS = 200
CHUNK_CHARS = 150
MAX_CHUNKS = 10
CHUNK_DELAY_SECONDS = 0.3

# Anything that is not a letter, digit, whitespace or basic punctuation
_UNSPEAKABLE = re.compile(r"[^\w\s'.,!?]|_")


def sanitize_for_speech(text: str) -> str:
	cleaned = _UNSPEAKABLE.sub("", text or "")
	return re.sub(r"\s+", " ", cleaned).strip()


class AudioSynthesisAssembler:
	"""Speech for arbitrary-length text, assembled from short provider requests.

	Audio is best effort: provider failures degrade to partial or empty audio
	and are never raised.
	"""

	def __init__(
		self,
		tts,
		*,
		single_request_chars: int = SINGLE_REQUEST_CHARS,
		chunk_chars: int = CHUNK_CHARS,
		max_chunks: int = MAX_CHUNKS,
		chunk_delay: float = CHUNK_DELAY_SECONDS,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	) -> None:
		self._tts = tts
		self.single_request_chars = single_request_chars
		self.chunk_chars = chunk_chars
		self.max_chunks = max_chunks
		self.chunk_delay = chunk_delay
		self._sleep = sleep

	async def synthesize(self, text: str, lang: str) -> SynthesisResult:
		safe_text = sanitize_for_speech(text)
		if not safe_text:
			return SynthesisResult(audio_base64="")

		if len(safe_text) <= self.single_request_chars:
			try:
				audio = await self._tts.synthesize(safe_text, lang)
			except ProviderUnavailable as err:
				logger.warning("Speech synthesis failed", extra={"lang": lang, "error": str(err)})
				return SynthesisResult(audio_base64="", degraded=True)
			return SynthesisResult(audio_base64=base64.b64encode(audio).decode("ascii"))

		chunks = chunk_text(safe_text, self.chunk_chars)
		if len(chunks) > self.max_chunks:
			logger.info(
				"Truncating speech to chunk ceiling",
				extra={"lang": lang, "chunks": len(chunks), "max_chunks": self.max_chunks},
			)
			chunks = chunks[: self.max_chunks]

		buffers: List[bytes] = []
		failures = 0
		for index, chunk in enumerate(chunks):
			if index > 0:
				await self._sleep(self.chunk_delay)
			try:
				buffers.append(await self._tts.synthesize(chunk, lang))
			except ProviderUnavailable as err:
				failures += 1
				logger.warning(
					"Speech chunk failed",
					extra={"lang": lang, "chunk_index": index, "status": err.status_code, "error": err.detail},
				)

		if not buffers:
			return SynthesisResult(audio_base64="", degraded=True)
		return SynthesisResult(
			audio_base64=base64.b64encode(b"".join(buffers)).decode("ascii"),
			degraded=failures > 0,
		)
