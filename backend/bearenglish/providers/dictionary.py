from __future__ import annotations

from typing import List
from urllib.parse import quote

import httpx

from ..errors import ProviderUnavailable


class DictionaryClient:
	"""Free Dictionary API lookups.

	``phonetics`` returns the raw transcription candidates for a word in the
	order the dictionary lists them; the entry-level ``phonetic`` field comes
	last. An unknown word yields an empty list.
	"""

	name = "dictionary"

	def __init__(self, http: httpx.AsyncClient, base_url: str) -> None:
		self._http = http
		self._base_url = base_url.rstrip("/")

	async def phonetics(self, word: str) -> List[str]:
		url = f"{self._base_url}/{quote(word)}"
		try:
			r = await self._http.get(url)
		except httpx.RequestError as err:
			raise ProviderUnavailable(self.name, str(err)) from err
		if r.status_code == 404:
			return []
		if r.status_code != 200:
			raise ProviderUnavailable(self.name, f"lookup failed for {word!r}", status_code=r.status_code)
		try:
			data = r.json()
		except ValueError as err:
			raise ProviderUnavailable(self.name, "response is not JSON") from err
		if not isinstance(data, list) or not data or not isinstance(data[0], dict):
			return []
		entry = data[0]
		candidates = [
			p["text"]
			for p in entry.get("phonetics") or []
			if isinstance(p, dict) and isinstance(p.get("text"), str) and p["text"].strip()
		]
		if isinstance(entry.get("phonetic"), str) and entry["phonetic"].strip():
			candidates.append(entry["phonetic"])
		return candidates
