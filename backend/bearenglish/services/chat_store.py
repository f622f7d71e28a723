from __future__ import annotations

import json
import logging
from typing import List, Optional

from ..models import ConversationTurn

logger = logging.getLogger(__name__)

GUEST_ID = "guest"
MAX_TURNS = 15
EXPIRE_SECONDS = 3600


def conversation_key(conversation_id: Optional[str]) -> str:
	return f"chat:{(conversation_id or '').strip() or GUEST_ID}"


class ChatContextStore:
	"""Sliding-window conversation history kept in a Redis list per conversation.

	Every write trims the list to the newest ``max_turns`` entries and pushes the
	key's expiry ``expire_seconds`` into the future, so active conversations stay
	alive and abandoned ones are reclaimed by Redis.
	"""

	def __init__(self, redis, *, max_turns: int = MAX_TURNS, expire_seconds: int = EXPIRE_SECONDS) -> None:
		self._redis = redis
		self.max_turns = max_turns
		self.expire_seconds = expire_seconds

	async def append(self, conversation_id: Optional[str], turn: ConversationTurn) -> None:
		key = conversation_key(conversation_id)
		payload = json.dumps({"role": turn.role, "text": turn.text}, ensure_ascii=False)
		# Overlapping appends interleave; last write order wins
		async with self._redis.pipeline(transaction=False) as pipe:
			pipe.rpush(key, payload)
			pipe.ltrim(key, -self.max_turns, -1)
			pipe.expire(key, self.expire_seconds)
			await pipe.execute()

	async def recent_history(self, conversation_id: Optional[str], n: int) -> List[ConversationTurn]:
		if n <= 0:
			return []
		raw = await self._redis.lrange(conversation_key(conversation_id), -n, -1)
		turns: List[ConversationTurn] = []
		for item in raw:
			if isinstance(item, bytes):
				item = item.decode("utf-8")
			try:
				data = json.loads(item)
				turns.append(ConversationTurn(role=data["role"], text=data["text"]))
			except (ValueError, KeyError, TypeError):
				logger.warning("Skipping unreadable history entry", extra={"key": conversation_key(conversation_id)})
		return turns

	async def clear(self, conversation_id: Optional[str]) -> None:
		await self._redis.delete(conversation_key(conversation_id))
