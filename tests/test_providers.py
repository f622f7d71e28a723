from __future__ import annotations

import asyncio
import json
import threading

import httpx
import pytest

from bearenglish.errors import ProviderUnavailable
from bearenglish.gemini_client import GeminiClient
from bearenglish.providers.dictionary import DictionaryClient
from bearenglish.providers import transcription
from bearenglish.providers.transcription import AssemblyAIClient
from bearenglish.providers.translate import GoogleTranslateClient
from bearenglish.providers.tts import GoogleTTSClient
from bearenglish.settings import Settings


def _client(handler) -> httpx.AsyncClient:
	return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _run(coro_factory, handler):
	async def main():
		async with _client(handler) as http:
			return await coro_factory(http)
	return asyncio.run(main())


def test_translate_joins_segments_and_reads_romanization() -> None:
	seen = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["params"] = request.url.params
		return httpx.Response(200, json=[[["你好，", "Hello, ", None, None, 10], ["世界", "world", None, None, 10], [None, None, "Nǐ hǎo, shìjiè", "həˈlō wərld"]], None, "en"])

	text, romanized = _run(lambda http: GoogleTranslateClient(http, "https://t.example/single").translate("Hello, world", "en", "zh-CN"), handler)
	assert text == "你好，世界"
	assert romanized == "Nǐ hǎo, shìjiè"
	assert seen["params"]["sl"] == "en" and seen["params"]["tl"] == "zh-CN"
	assert seen["params"].get_list("dt") == ["t", "rm"]


@pytest.mark.parametrize(
	"response",
	[httpx.Response(429, text="slow down"), httpx.Response(200, text="<html>"), httpx.Response(200, json={"x": 1})],
)
def test_translate_failures_are_provider_unavailable(response) -> None:
	with pytest.raises(ProviderUnavailable):
		_run(lambda http: GoogleTranslateClient(http, "https://t.example/single").translate("hi", "en", "vi"), lambda r: response)


def test_tts_returns_raw_bytes() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		assert request.url.params["tl"] == "vi"
		return httpx.Response(200, content=b"ID3audio")

	assert _run(lambda http: GoogleTTSClient(http, "https://tts.example").synthesize("xin chào", "vi"), handler) == b"ID3audio"


def test_tts_error_status_raises() -> None:
	with pytest.raises(ProviderUnavailable):
		_run(lambda http: GoogleTTSClient(http, "https://tts.example").synthesize("x", "en"), lambda r: httpx.Response(500))


def test_dictionary_candidates_and_unknown_word() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		if request.url.path.endswith("/hello"):
			return httpx.Response(200, json=[{"phonetic": "həˈləʊ", "phonetics": [{"audio": ""}, {"text": "/həˈloʊ/"}]}])
		return httpx.Response(404, json={"title": "No Definitions Found"})

	dictionary = lambda http: DictionaryClient(http, "https://dict.example/api/v2/entries/en/")
	assert _run(lambda http: dictionary(http).phonetics("hello"), handler) == ["/həˈloʊ/", "həˈləʊ"]
	assert _run(lambda http: dictionary(http).phonetics("zorp"), handler) == []


def test_assemblyai_upload_submit_and_poll(tmp_path) -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		assert request.headers["authorization"] == "key"
		if request.url.path == "/v2/upload":
			assert request.content == b"audio"
			return httpx.Response(200, json={"upload_url": "https://cdn.example/a"})
		if request.url.path == "/v2/transcript":
			body = json.loads(request.content)
			assert body == {"audio_url": "https://cdn.example/a", "language_code": "en_us"}
			return httpx.Response(200, json={"id": "t1", "status": "queued"})
		return httpx.Response(200, json={"id": "t1", "status": "completed", "text": "Hi.", "audio_duration": 2})

	async def flow(http, path):
		client = AssemblyAIClient(http, "https://aai.example/v2", "key")
		url = await client.upload(path)
		job = await client.submit(url, "en_us")
		return job, await client.get(job.id)

	path = tmp_path / "a.wav"
	path.write_bytes(b"audio")
	submitted, finished = _run(lambda http: flow(http, path), handler)
	assert submitted.status == "queued" and not submitted.terminal
	assert finished.terminal and finished.text == "Hi." and finished.audio_duration_seconds == 2.0


def test_assemblyai_requires_api_key() -> None:
	with pytest.raises(ProviderUnavailable):
		_run(lambda http: AssemblyAIClient(http, "https://aai.example/v2", None).get("t1"), lambda r: httpx.Response(200))


def test_assemblyai_reads_upload_off_the_event_loop(tmp_path, monkeypatch) -> None:
	read_threads = []
	real_read = transcription._read_audio

	def recording_read(path):
		read_threads.append(threading.current_thread())
		return real_read(path)

	monkeypatch.setattr(transcription, "_read_audio", recording_read)
	path = tmp_path / "a.wav"
	path.write_bytes(b"audio")

	def handler(request: httpx.Request) -> httpx.Response:
		assert request.content == b"audio"
		return httpx.Response(200, json={"upload_url": "https://cdn.example/a"})

	url = _run(lambda http: AssemblyAIClient(http, "https://aai.example/v2", "key").upload(path), handler)
	assert url == "https://cdn.example/a"
	assert len(read_threads) == 1
	assert read_threads[0] is not threading.main_thread()


def test_gemini_generate_reads_first_candidate() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		assert request.url.params["key"] == "secret"
		return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Hello!"}]}}]})

	config = Settings(GEMINI_API_KEY="secret")
	assert _run(lambda http: GeminiClient(config, http=http).generate("hi"), handler) == "Hello!"


def test_gemini_falls_back_to_openrouter() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		if "openrouter" in request.url.host:
			return httpx.Response(200, json={"choices": [{"message": {"content": "From fallback"}}]})
		return httpx.Response(503, text="overloaded")

	config = Settings(GEMINI_API_KEY="secret", OPENROUTER_API_KEY="or-key")
	assert _run(lambda http: GeminiClient(config, http=http).generate("hi"), handler) == "From fallback"


def test_gemini_without_key_is_unavailable() -> None:
	config = Settings(GEMINI_API_KEY=None, OPENROUTER_API_KEY=None)
	with pytest.raises(ProviderUnavailable):
		_run(lambda http: GeminiClient(config, http=http).generate("hi"), lambda r: httpx.Response(200))


def test_gemini_closes_only_its_own_client() -> None:
	config = Settings(GEMINI_API_KEY="secret")
	owned = GeminiClient(config)
	asyncio.run(owned.aclose())
	assert owned._client.is_closed

	async def shared_flow(http):
		await GeminiClient(config, http=http).aclose()
		return http.is_closed

	assert _run(shared_flow, lambda r: httpx.Response(200)) is False
