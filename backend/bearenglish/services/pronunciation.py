"""
Pronunciation scoring against a reference sentence.

The learner's recording is transcribed by an asynchronous job on the
transcription provider, and the transcript is compared with the sentence the
learner was asked to read. Unlike translation and audio, a failed job is an
error: a silently missing score would mislead the learner.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from ..errors import InvalidArgument, TranscriptionFailed, TranscriptionTimeout
from ..models import JOB_COMPLETED, PronunciationResult, TranscriptionJob
from ..text.similarity import similarity, strip_trailing_period

logger = logging.getLogger(__name__)

POLL_SECONDS = 3.0
MAX_WAIT_SECONDS = 180.0
LANGUAGE_CODE = "en_us"


def _write_audio(fd: int, audio: bytes) -> None:
	with os.fdopen(fd, "wb") as fh:
		fh.write(audio)


class PronunciationAssessor:
	def __init__(
		self,
		transcriber,
		*,
		language_code: str = LANGUAGE_CODE,
		poll_seconds: float = POLL_SECONDS,
		max_wait_seconds: float = MAX_WAIT_SECONDS,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
		clock: Callable[[], float] = time.monotonic,
		temp_dir: Optional[str] = None,
	) -> None:
		self._transcriber = transcriber
		self.language_code = language_code
		self.poll_seconds = poll_seconds
		self.max_wait_seconds = max_wait_seconds
		self._sleep = sleep
		self._clock = clock
		self._temp_dir = temp_dir

	async def wait_for_job(self, job: TranscriptionJob) -> TranscriptionJob:
		"""Poll ``job`` until it reaches a terminal state or the wait budget runs out."""
		started = self._clock()
		while not job.terminal:
			waited = self._clock() - started
			if waited >= self.max_wait_seconds:
				logger.error("Transcription poll timed out", extra={"job_id": job.id, "status": job.status})
				raise TranscriptionTimeout(waited, job_id=job.id)
			await self._sleep(self.poll_seconds)
			job = await self._transcriber.get(job.id)
			logger.debug("Polled transcription job", extra={"job_id": job.id, "status": job.status})
		return job

	async def assess(self, reference_text: str, audio: bytes, filename: Optional[str] = None) -> PronunciationResult:
		if not isinstance(reference_text, str) or not reference_text.strip():
			raise InvalidArgument("referenceText is required")
		if not audio:
			raise InvalidArgument("audio file is required")

		suffix = Path(filename).suffix if filename else ".audio"
		fd, tmp_name = tempfile.mkstemp(prefix="pron-", suffix=suffix, dir=self._temp_dir)
		tmp_path = Path(tmp_name)
		try:
			await asyncio.to_thread(_write_audio, fd, audio)
			upload_url = await self._transcriber.upload(tmp_path)
			job = await self._transcriber.submit(upload_url, self.language_code)
			logger.info("Submitted transcription job", extra={"job_id": job.id, "status": job.status})
			job = await self.wait_for_job(job)

			if job.status != JOB_COMPLETED:
				message = job.error or "transcription did not complete"
				logger.error(
					"Transcription job failed",
					extra={"job_id": job.id, "status": job.status, "error": message},
				)
				raise TranscriptionFailed(job.status, message, job_id=job.id)

			transcript = strip_trailing_period(job.text or "")
			score = similarity(reference_text.strip(), transcript)
			return PronunciationResult(
				transcription=transcript,
				duration_seconds=job.audio_duration_seconds,
				job_id=job.id,
				accuracy_percentage=score,
			)
		finally:
			tmp_path.unlink(missing_ok=True)
