from __future__ import annotations

from typing import Any, Optional, Tuple

import httpx

from ..errors import ProviderUnavailable


class GoogleTranslateClient:
	"""Translation provider backed by the public Google Translate endpoint.

	``translate`` returns the translated text and, when the provider sends one,
	a romanized reading of it (e.g. pinyin for Chinese targets).
	"""

	name = "google-translate"

	def __init__(self, http: httpx.AsyncClient, base_url: str) -> None:
		self._http = http
		self._base_url = base_url

	async def translate(self, text: str, source_lang: str, target_lang: str) -> Tuple[str, Optional[str]]:
		params = [
			("client", "gtx"),
			("sl", source_lang),
			("tl", target_lang),
			("dt", "t"),
			("dt", "rm"),
			("q", text),
		]
		try:
			r = await self._http.get(self._base_url, params=params)
		except httpx.RequestError as err:
			raise ProviderUnavailable(self.name, str(err)) from err
		if r.status_code != 200:
			raise ProviderUnavailable(self.name, r.text[:200], status_code=r.status_code)
		try:
			data = r.json()
		except ValueError as err:
			raise ProviderUnavailable(self.name, "response is not JSON") from err
		return _parse_segments(data, self.name)


def _parse_segments(data: Any, provider: str) -> Tuple[str, Optional[str]]:
	if not isinstance(data, list) or not data or not isinstance(data[0], list):
		raise ProviderUnavailable(provider, "malformed translation payload")
	translated_parts = []
	romanized_parts = []
	for segment in data[0]:
		if not isinstance(segment, list) or not segment:
			continue
		if isinstance(segment[0], str):
			translated_parts.append(segment[0])
		elif len(segment) > 2 and isinstance(segment[2], str) and segment[2].strip():
			# Transliteration row: [None, None, target reading, source reading]
			romanized_parts.append(segment[2].strip())
	translated = "".join(translated_parts).strip()
	if not translated:
		raise ProviderUnavailable(provider, "empty translation in payload")
	romanized = " ".join(" ".join(romanized_parts).split()) or None
	return translated, romanized
