from __future__ import annotations

import httpx
import redis.asyncio as redis
from fastapi import Request

from .gemini_client import GeminiClient
from .providers.dictionary import DictionaryClient
from .providers.transcription import AssemblyAIClient
from .providers.translate import GoogleTranslateClient
from .providers.tts import GoogleTTSClient
from .services.audio import AudioSynthesisAssembler
from .services.chat_store import ChatContextStore
from .services.phonetics import PhoneticAnnotator
from .services.pronunciation import PronunciationAssessor
from .services.reply import ConversationalReplyService
from .services.translation import TranslationPipeline
from .settings import Settings


def build_services(state, config: Settings) -> None:
	"""Create the shared provider clients and services and attach them to ``state``."""
	http = httpx.AsyncClient(timeout=config.http_timeout_seconds)
	redis_client = redis.from_url(config.redis_url, decode_responses=True)
	gemini = GeminiClient(config, http=http)

	store = ChatContextStore(
		redis_client,
		max_turns=config.chat_max_turns,
		expire_seconds=config.chat_expire_seconds,
	)
	audio = AudioSynthesisAssembler(
		GoogleTTSClient(http, config.tts_base_url),
		single_request_chars=config.tts_single_request_chars,
		chunk_chars=config.tts_chunk_chars,
		max_chunks=config.tts_max_chunks,
		chunk_delay=config.tts_chunk_delay_seconds,
	)
	annotator = PhoneticAnnotator(DictionaryClient(http, config.dictionary_base_url))

	state.http = http
	state.redis = redis_client
	state.gemini = gemini
	state.chat_store = store
	state.reply_service = ConversationalReplyService(
		store,
		gemini,
		system_context=config.api_context_app,
		history_window=config.chat_history_window,
	)
	state.translation_pipeline = TranslationPipeline(
		GoogleTranslateClient(http, config.translate_base_url),
		annotator,
		audio,
		chunk_chars=config.translate_chunk_chars,
		max_attempts=config.translate_max_attempts,
		backoff_seconds=config.translate_backoff_seconds,
		chunk_delay=config.translate_chunk_delay_seconds,
	)
	state.pronunciation_assessor = PronunciationAssessor(
		AssemblyAIClient(http, config.assemblyai_base_url, config.assemblyai_api_key),
		language_code=config.transcription_language,
		poll_seconds=config.transcription_poll_seconds,
		max_wait_seconds=config.transcription_max_wait_seconds,
	)


async def close_services(state) -> None:
	gemini = getattr(state, "gemini", None)
	if gemini is not None:
		await gemini.aclose()
	http = getattr(state, "http", None)
	if http is not None:
		await http.aclose()
	redis_client = getattr(state, "redis", None)
	if redis_client is not None:
		await redis_client.aclose()


def get_chat_store(request: Request) -> ChatContextStore:
	return request.app.state.chat_store


def get_reply_service(request: Request) -> ConversationalReplyService:
	return request.app.state.reply_service


def get_translation_pipeline(request: Request) -> TranslationPipeline:
	return request.app.state.translation_pipeline


def get_pronunciation_assessor(request: Request) -> PronunciationAssessor:
	return request.app.state.pronunciation_assessor
