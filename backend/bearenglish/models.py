from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Role = Literal["user", "assistant"]

# Terminal states of a transcription job
JOB_COMPLETED = "completed"
JOB_TERMINAL_STATES = frozenset({"completed", "error", "failed"})


@dataclass(frozen=True)
class ConversationTurn:
	role: Role
	text: str


@dataclass(frozen=True)
class DegradedResult:
	"""A chunk the provider never translated; ``text`` is the verbatim source."""
	index: int
	text: str
	reason: str


@dataclass(frozen=True)
class ChunkTranslation:
	index: int
	text: str
	romanization: Optional[str] = None


@dataclass(frozen=True)
class SynthesisResult:
	audio_base64: str
	degraded: bool = False


@dataclass(frozen=True)
class TranslationResult:
	translated_text: str
	source_ipa: Optional[str]
	target_ipa: Optional[str]
	original_audio_base64: str
	translated_audio_base64: str
	target_romanization: Optional[str] = None
	degraded_chunks: Tuple[int, ...] = ()
	audio_degraded: bool = False

	@property
	def degraded(self) -> bool:
		return bool(self.degraded_chunks) or self.audio_degraded


@dataclass(frozen=True)
class TranscriptionJob:
	id: str
	status: str
	text: Optional[str] = None
	audio_duration_seconds: Optional[float] = None
	error: Optional[str] = None

	@property
	def terminal(self) -> bool:
		return self.status in JOB_TERMINAL_STATES


@dataclass(frozen=True)
class PronunciationResult:
	transcription: str
	duration_seconds: Optional[float]
	job_id: str
	accuracy_percentage: float

