"""
Length-bounded text chunking for provider requests.

Translation and text-to-speech providers reject or truncate long inputs, so
text is cut into pieces no longer than ``max_length`` characters. Sentences are
kept together when they fit; a sentence that does not fit is cut between
words. Words are never split, so a single word longer than ``max_length`` is
emitted whole.
"""

from __future__ import annotations

import re
from typing import List

from ..errors import InvalidArgument

# Terminal punctuation followed by whitespace ends a sentence
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> List[str]:
	return [" ".join(s.split()) for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def _word_groups(sentence: str, max_length: int) -> List[str]:
	groups: List[str] = []
	current = ""
	for word in sentence.split():
		if not current:
			current = word
		elif len(current) + 1 + len(word) <= max_length:
			current = f"{current} {word}"
		else:
			groups.append(current)
			current = word
	if current:
		groups.append(current)
	return groups


def chunk_text(text: str, max_length: int) -> List[str]:
	"""Split ``text`` into ordered chunks of at most ``max_length`` characters.

	Text that already fits is returned unchanged as a single chunk. Otherwise
	sentences (and, for over-long sentences, word groups) are packed greedily
	and joined with single spaces.

	Raises:
		InvalidArgument: if ``text`` is not a string or ``max_length`` is not a
			positive integer.
	"""
	if not isinstance(text, str):
		raise InvalidArgument(f"text must be a string, got {type(text).__name__}")
	if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0:
		raise InvalidArgument("max_length must be a positive integer")
	if len(text) <= max_length:
		return [text]

	pieces: List[str] = []
	for sentence in split_sentences(text):
		if len(sentence) <= max_length:
			pieces.append(sentence)
		else:
			pieces.extend(_word_groups(sentence, max_length))

	chunks: List[str] = []
	current = ""
	for piece in pieces:
		if not current:
			current = piece
		elif len(current) + 1 + len(piece) <= max_length:
			current = f"{current} {piece}"
		else:
			chunks.append(current)
			current = piece
	if current:
		chunks.append(current)
	return [c for c in chunks if c.strip()]
