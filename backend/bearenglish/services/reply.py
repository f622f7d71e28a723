from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..models import ConversationTurn
from .chat_store import ChatContextStore

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I don't understand yet."
HISTORY_WINDOW = 10


def render_transcript(turns: Iterable[ConversationTurn]) -> str:
	lines = []
	for turn in turns:
		speaker = "User" if turn.role == "user" else "Bot"
		lines.append(f"{speaker}: {turn.text}")
	return "\n".join(lines)


def build_prompt(context: str, transcript: str, message: str) -> str:
	return f"""
{context}

Conversation so far:
{transcript}

Reply to the learner's latest message: {message}
""".strip()


class ConversationalReplyService:
	def __init__(self, store: ChatContextStore, llm, *, system_context: str, history_window: int = HISTORY_WINDOW) -> None:
		self._store = store
		self._llm = llm
		self._system_context = system_context
		self._history_window = history_window

	async def reply(self, conversation_id: Optional[str], user_message: str) -> str:
		"""Answer ``user_message`` in the context of the stored conversation.

		Never raises: store or provider failures are logged and answered with
		``FALLBACK_REPLY``.
		"""
		try:
			await self._store.append(conversation_id, ConversationTurn(role="user", text=user_message))
			history = await self._store.recent_history(conversation_id, self._history_window)
			prompt = build_prompt(self._system_context, render_transcript(history), user_message)
			text = (await self._llm.generate(prompt)).strip()
			if not text:
				raise ValueError("generative provider returned an empty reply")
			await self._store.append(conversation_id, ConversationTurn(role="assistant", text=text))
			return text
		except Exception:
			logger.exception("Reply generation failed", extra={"conversation_id": conversation_id or "guest"})
			return FALLBACK_REPLY
