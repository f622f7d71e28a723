from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

DEFAULT_CONTEXT = (
	"You are Bear, a friendly English tutor inside a language-learning app. "
	"Answer briefly, correct the learner's mistakes gently and keep the conversation going."
)

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# OpenRouter fallback configuration (optional)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="x-ai/grok-4-fast:free", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://localhost", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="Bear English", validation_alias="OPENROUTER_TITLE")

	# Chat memory
	api_context_app: str = Field(default=DEFAULT_CONTEXT, validation_alias="API_CONTEXT_APP")
	redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
	chat_max_turns: int = Field(default=15, validation_alias="CHAT_MAX_TURNS")
	chat_expire_seconds: int = Field(default=3600, validation_alias="CHAT_EXPIRE_SECONDS")
	chat_history_window: int = Field(default=10, validation_alias="CHAT_HISTORY_WINDOW")

	# Translation
	translate_base_url: str = Field(default="https://translate.googleapis.com/translate_a/single", validation_alias="TRANSLATE_BASE_URL")
	translate_chunk_chars: int = Field(default=800, validation_alias="TRANSLATE_CHUNK_CHARS")
	translate_max_attempts: int = Field(default=3, validation_alias="TRANSLATE_MAX_ATTEMPTS")
	translate_backoff_seconds: float = Field(default=1.0, validation_alias="TRANSLATE_BACKOFF_SECONDS")
	translate_chunk_delay_seconds: float = Field(default=0.2, validation_alias="TRANSLATE_CHUNK_DELAY_SECONDS")

	# Text-to-speech
	tts_base_url: str = Field(default="https://translate.google.com/translate_tts", validation_alias="TTS_BASE_URL")
	tts_single_request_chars: int = Field(default=200, validation_alias="TTS_SINGLE_REQUEST_CHARS")
	tts_chunk_chars: int = Field(default=150, validation_alias="TTS_CHUNK_CHARS")
	tts_max_chunks: int = Field(default=10, validation_alias="TTS_MAX_CHUNKS")
	tts_chunk_delay_seconds: float = Field(default=0.3, validation_alias="TTS_CHUNK_DELAY_SECONDS")

	# Dictionary used for IPA lookups
	dictionary_base_url: str = Field(default="https://api.dictionaryapi.dev/api/v2/entries/en", validation_alias="DICTIONARY_BASE_URL")

	# Transcription (AssemblyAI)
	assemblyai_api_key: str | None = Field(default=None, validation_alias="ASSEMBLYAI_API_KEY")
	assemblyai_base_url: str = Field(default="https://api.assemblyai.com/v2", validation_alias="ASSEMBLYAI_BASE_URL")
	transcription_language: str = Field(default="en_us", validation_alias="TRANSCRIPTION_LANGUAGE")
	transcription_poll_seconds: float = Field(default=3.0, validation_alias="TRANSCRIPTION_POLL_SECONDS")
	# No upper bound upstream; anything longer than this is reported as a timeout
	transcription_max_wait_seconds: float = Field(default=180.0, validation_alias="TRANSCRIPTION_MAX_WAIT_SECONDS")

	http_timeout_seconds: float = Field(default=30.0, validation_alias="HTTP_TIMEOUT_SECONDS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_json: bool = Field(default=True, validation_alias="LOG_JSON")
	cors_origins: list[str] = Field(default_factory=lambda: ["*"], validation_alias="CORS_ORIGINS")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
