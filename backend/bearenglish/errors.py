from __future__ import annotations
from typing import Optional


class BearEnglishError(Exception):
	"""Base class for errors raised by the utilities pipeline."""


class InvalidArgument(BearEnglishError, ValueError):
	"""A required field is missing or empty. Raised before any external call."""


class ProviderUnavailable(BearEnglishError):
	"""An external provider call failed in a way that may succeed on retry."""

	def __init__(self, provider: str, detail: str, *, status_code: Optional[int] = None) -> None:
		self.provider = provider
		self.detail = detail
		self.status_code = status_code
		suffix = f" (HTTP {status_code})" if status_code is not None else ""
		super().__init__(f"{provider} unavailable{suffix}: {detail}")


class TranscriptionFailed(BearEnglishError):
	"""A transcription job reached a terminal state other than ``completed``."""

	def __init__(self, status: str, message: str, *, job_id: Optional[str] = None) -> None:
		self.status = status
		self.message = message
		self.job_id = job_id
		super().__init__(f"Transcription {status}: {message}")


class TranscriptionTimeout(TranscriptionFailed):
	def __init__(self, waited_seconds: float, *, job_id: Optional[str] = None) -> None:
		super().__init__(
			"timeout",
			f"job did not finish within {waited_seconds:.0f}s",
			job_id=job_id,
		)
		self.waited_seconds = waited_seconds
