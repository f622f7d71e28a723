from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..errors import ProviderUnavailable
from ..models import TranscriptionJob


class AssemblyAIClient:
	"""Upload + asynchronous transcription job API (AssemblyAI v2 REST)."""

	name = "assemblyai"

	def __init__(self, http: httpx.AsyncClient, base_url: str, api_key: Optional[str]) -> None:
		self._http = http
		self._base_url = base_url.rstrip("/")
		self._api_key = api_key

	def _headers(self) -> Dict[str, str]:
		if not self._api_key:
			raise ProviderUnavailable(self.name, "ASSEMBLYAI_API_KEY is not configured")
		return {"authorization": self._api_key}

	async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
		headers = self._headers()
		try:
			r = await self._http.request(method, f"{self._base_url}{path}", headers=headers, **kwargs)
		except httpx.RequestError as err:
			raise ProviderUnavailable(self.name, str(err)) from err
		if r.status_code >= 400:
			raise ProviderUnavailable(self.name, r.text[:200], status_code=r.status_code)
		try:
			data = r.json()
		except ValueError as err:
			raise ProviderUnavailable(self.name, "response is not JSON") from err
		if not isinstance(data, dict):
			raise ProviderUnavailable(self.name, "unexpected response shape")
		return data

	async def upload(self, path: Path) -> str:
		content = await asyncio.to_thread(_read_audio, path)
		data = await self._request("POST", "/upload", content=content)
		upload_url = data.get("upload_url")
		if not upload_url:
			raise ProviderUnavailable(self.name, "upload response has no upload_url")
		return upload_url

	async def submit(self, audio_url: str, language_code: str) -> TranscriptionJob:
		data = await self._request(
			"POST",
			"/transcript",
			json={"audio_url": audio_url, "language_code": language_code},
		)
		return _job_from(data)

	async def get(self, job_id: str) -> TranscriptionJob:
		data = await self._request("GET", f"/transcript/{job_id}")
		return _job_from(data)


def _read_audio(path: Path) -> bytes:
	return path.read_bytes()


def _job_from(data: Dict[str, Any]) -> TranscriptionJob:
	job_id = data.get("id")
	status = data.get("status")
	if not job_id or not status:
		raise ProviderUnavailable(AssemblyAIClient.name, "transcript response is missing id or status")
	duration = data.get("audio_duration")
	return TranscriptionJob(
		id=str(job_id),
		status=str(status),
		text=data.get("text"),
		audio_duration_seconds=float(duration) if duration is not None else None,
		error=data.get("error"),
	)
