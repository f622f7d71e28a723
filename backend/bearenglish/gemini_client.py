from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import ProviderUnavailable
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class GeminiClient:
	"""Generative-text provider: Gemini, with OpenRouter as an optional fallback."""

	def __init__(
		self,
		config: Optional[Settings] = None,
		*,
		http: Optional[httpx.AsyncClient] = None,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
	) -> None:
		config = config or default_settings
		self.api_key = config.gemini_api_key
		self.model = model or config.gemini_model
		self.provider = config.gemini_provider
		if self.provider == "vertex":
			region = config.vertex_region
			project = config.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._owns_client = http is None
		self._client = http or httpx.AsyncClient(timeout=config.http_timeout_seconds)
		self._openrouter_api_key = config.openrouter_api_key
		self._openrouter_model = config.openrouter_model
		self._openrouter_base_url = config.openrouter_base_url
		self._openrouter_headers = {
			"Authorization": f"Bearer {self._openrouter_api_key}" if self._openrouter_api_key else "",
			"Content-Type": "application/json",
			"HTTP-Referer": config.openrouter_referer,
			"X-Title": config.openrouter_title,
		}

	@property
	def configured(self) -> bool:
		return bool(self.api_key)

	async def generate(self, prompt: str) -> str:
		try:
			return await self._generate_gemini(prompt)
		except ProviderUnavailable as primary_error:
			if not self._openrouter_api_key:
				raise
			logger.warning("Gemini call failed, trying OpenRouter", extra={"error": str(primary_error)})
			return await self._fallback_generate(prompt, primary_error)

	async def _generate_gemini(self, prompt: str) -> str:
		if not self.api_key:
			raise ProviderUnavailable("gemini", "GEMINI_API_KEY is not configured")
		payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise ProviderUnavailable("gemini", http_err.response.text[:200], status_code=http_err.response.status_code) from http_err
		except httpx.RequestError as net_err:
			raise ProviderUnavailable("gemini", str(net_err)) from net_err
		try:
			data = r.json()
			return data["candidates"][0]["content"]["parts"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise ProviderUnavailable("gemini", f"Unexpected Gemini response: {r.text[:200]}") from err

	async def _fallback_generate(self, prompt: str, primary_error: ProviderUnavailable) -> str:
		headers = {k: v for k, v in self._openrouter_headers.items() if v}
		payload: Dict[str, Any] = {
			"model": self._openrouter_model,
			"messages": [{"role": "user", "content": prompt}],
		}
		try:
			r = await self._client.post(
				self._openrouter_base_url,
				headers=headers,
				json=payload,
			)
			r.raise_for_status()
			data = r.json()
			return data["choices"][0]["message"]["content"]
		except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as fallback_err:
			raise ProviderUnavailable(
				"gemini",
				f"primary call failed ({primary_error.detail}); fallback via OpenRouter also failed",
			) from fallback_err

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()
