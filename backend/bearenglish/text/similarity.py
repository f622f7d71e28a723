from __future__ import annotations

import Levenshtein


def similarity(a: str, b: str) -> float:
	"""Case-insensitive edit-distance similarity as a percentage in [0, 100].

	Two empty strings are considered identical.
	"""
	a = (a or "").lower()
	b = (b or "").lower()
	longest = max(len(a), len(b))
	if longest == 0:
		return 100.0
	distance = Levenshtein.distance(a, b)
	return round(((longest - distance) / longest) * 100, 2)


def strip_trailing_period(transcript: str) -> str:
	# Transcripts of a single spoken sentence always come back with a final period
	text = (transcript or "").strip()
	if text.endswith("."):
		text = text[:-1]
	return text
