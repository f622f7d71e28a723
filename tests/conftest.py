from __future__ import annotations

from typing import Dict, List

import pytest

from bearenglish.errors import ProviderUnavailable
from bearenglish.models import TranscriptionJob


def _bounds(length: int, start: int, stop: int) -> tuple[int, int]:
	if start < 0:
		start = max(length + start, 0)
	if stop < 0:
		stop = length + stop
	return start, min(stop, length - 1)


class FakeRedis:
	"""Just enough of redis.asyncio for the chat store: lists, expiry, pipelines."""

	def __init__(self) -> None:
		self.lists: Dict[str, List[str]] = {}
		self.ttl: Dict[str, int] = {}
		self.commands: List[tuple] = []

	def pipeline(self, transaction: bool = True) -> "FakePipeline":
		return FakePipeline(self)

	async def rpush(self, key: str, value: str) -> int:
		self.commands.append(("rpush", key))
		self.lists.setdefault(key, []).append(value)
		return len(self.lists[key])

	async def ltrim(self, key: str, start: int, stop: int) -> bool:
		self.commands.append(("ltrim", key, start, stop))
		items = self.lists.get(key, [])
		lo, hi = _bounds(len(items), start, stop)
		self.lists[key] = items[lo : hi + 1]
		return True

	async def expire(self, key: str, seconds: int) -> bool:
		self.commands.append(("expire", key, seconds))
		self.ttl[key] = seconds
		return True

	async def lrange(self, key: str, start: int, stop: int) -> List[str]:
		items = self.lists.get(key, [])
		lo, hi = _bounds(len(items), start, stop)
		return list(items[lo : hi + 1])

	async def delete(self, key: str) -> int:
		existed = key in self.lists
		self.lists.pop(key, None)
		self.ttl.pop(key, None)
		return int(existed)

	async def ping(self) -> bool:
		return True


class FakePipeline:
	def __init__(self, redis: FakeRedis) -> None:
		self._redis = redis
		self._queued: List[tuple] = []

	async def __aenter__(self) -> "FakePipeline":
		return self

	async def __aexit__(self, *exc) -> None:
		self._queued = []

	def rpush(self, key, value):
		self._queued.append(("rpush", key, value))
		return self

	def ltrim(self, key, start, stop):
		self._queued.append(("ltrim", key, start, stop))
		return self

	def expire(self, key, seconds):
		self._queued.append(("expire", key, seconds))
		return self

	async def execute(self) -> list:
		results = []
		for name, *args in self._queued:
			results.append(await getattr(self._redis, name)(*args))
		self._queued = []
		return results


class FakeTranslator:
	def __init__(self, mapping=None, *, fail_on=(), romanization=None) -> None:
		self.mapping = mapping or {}
		self.fail_on = set(fail_on)
		self.romanization = romanization
		self.calls: List[tuple] = []

	async def translate(self, text, source_lang, target_lang):
		self.calls.append((text, source_lang, target_lang))
		if text in self.fail_on:
			raise ProviderUnavailable("fake-translate", "boom", status_code=503)
		return self.mapping.get(text, f"T({text})"), self.romanization


class FakeTTS:
	def __init__(self, *, fail_on=()) -> None:
		self.fail_on = set(fail_on)
		self.calls: List[tuple] = []

	async def synthesize(self, text, lang):
		self.calls.append((text, lang))
		if text in self.fail_on or "*" in self.fail_on:
			raise ProviderUnavailable("fake-tts", "boom", status_code=500)
		return f"<{text}>".encode("utf-8")


class FakeDictionary:
	def __init__(self, entries=None, *, broken=()) -> None:
		self.entries = entries or {}
		self.broken = set(broken)
		self.calls: List[str] = []

	async def phonetics(self, word):
		self.calls.append(word)
		if word in self.broken:
			raise ProviderUnavailable("fake-dictionary", "timeout")
		return list(self.entries.get(word, []))


class FakeTranscriber:
	"""Replays a scripted sequence of job states for ``get``."""

	def __init__(self, states, *, job_id="job-1") -> None:
		self.job_id = job_id
		self.states = list(states)
		self.uploaded_paths = []
		self.submitted = []
		self.polls = 0

	async def upload(self, path):
		self.uploaded_paths.append(path)
		assert path.exists()
		return f"https://uploads.example/{path.name}"

	async def submit(self, audio_url, language_code):
		self.submitted.append((audio_url, language_code))
		return TranscriptionJob(id=self.job_id, status="queued")

	async def get(self, job_id):
		self.polls += 1
		state = self.states.pop(0) if len(self.states) > 1 else self.states[0]
		if isinstance(state, Exception):
			raise state
		return state


class SleepRecorder:
	def __init__(self) -> None:
		self.delays: List[float] = []

	async def __call__(self, seconds: float) -> None:
		self.delays.append(seconds)


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@pytest.fixture
def sleeper() -> SleepRecorder:
	return SleepRecorder()
