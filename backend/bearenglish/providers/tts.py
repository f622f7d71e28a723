from __future__ import annotations

import httpx

from ..errors import ProviderUnavailable


class GoogleTTSClient:
	"""Text-to-speech provider returning raw MP3 bytes for short text."""

	name = "google-tts"

	def __init__(self, http: httpx.AsyncClient, base_url: str) -> None:
		self._http = http
		self._base_url = base_url

	async def synthesize(self, text: str, lang: str) -> bytes:
		params = {"ie": "UTF-8", "q": text, "tl": lang, "client": "tw-ob"}
		try:
			r = await self._http.get(self._base_url, params=params, headers={"User-Agent": "Mozilla/5.0"})
		except httpx.RequestError as err:
			raise ProviderUnavailable(self.name, str(err)) from err
		if r.status_code != 200:
			raise ProviderUnavailable(self.name, f"synthesis rejected for lang={lang}", status_code=r.status_code)
		if not r.content:
			raise ProviderUnavailable(self.name, "empty audio body")
		return r.content
