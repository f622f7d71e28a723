"""
IPA annotation for English text.

Each word is resolved independently:

1. a hand-written table of function words, weak forms, contractions and a few
   words the dictionary gets wrong;
2. the dictionary collaborator;
3. the dictionary again for base forms obtained by stripping common inflection
   suffixes (``studies`` -> ``study``, ``making`` -> ``make``);
4. the lower-cased word itself.

The result is a concatenation of per-word transcriptions and does not model
linking or sentence intonation.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from ..errors import ProviderUnavailable

logger = logging.getLogger(__name__)

MANUAL_IPA: Dict[str, str] = {
	# Function words and weak forms
	"a": "ə",
	"the": "ðə",
	"an": "ən",
	"to": "tə",
	"for": "fər",
	"and": "ən(d)",
	"i": "aɪ",
	"of": "əv",
	"is": "ɪz",
	"was": "wɒz",
	"are": "ɑː(r)",
	"but": "bət",
	"or": "ɔː(r)",
	"at": "ət",
	"from": "frəm",
	"with": "wɪð",
	"as": "əz",
	"than": "ðən",
	"can": "kæn",
	"must": "mʌst",
	"will": "wɪl",
	"would": "wʊd",
	"should": "ʃʊd",
	"may": "meɪ",
	"might": "maɪt",
	"could": "kʊd",
	"do": "duː",
	"does": "dʌz",
	"has": "hæz",
	"had": "hæd",
	"have": "hæv",
	"go": "ɡəʊ",
	"get": "ɡet",
	"take": "teɪk",
	"in": "ɪn",
	"on": "ɒn",
	"under": "ˈʌndər",
	"by": "baɪ",
	# Contractions
	"i'm": "aɪm",
	"you're": "jʊə(r)",
	"he's": "hiːz",
	"she's": "ʃiːz",
	"it's": "ɪts",
	"we're": "wɪə(r)",
	"they're": "ðeə(r)",
	"i'll": "aɪl",
	"you'll": "juːl",
	"he'll": "hiːl",
	"she'll": "ʃiːl",
	"it'll": "ɪtəl",
	"we'll": "wiːl",
	"they'll": "ðeɪl",
	"i've": "aɪv",
	"we've": "wiːv",
	"they've": "ðeɪv",
	"you've": "juːv",
	"i'd": "aɪd",
	"you'd": "juːd",
	"he'd": "hiːd",
	"she'd": "ʃiːd",
	"it'd": "ɪtəd",
	"we'd": "wiːd",
	"they'd": "ðeɪd",
	"don't": "dəʊnt",
	"can't": "kɑːnt",
	"won't": "wəʊnt",
	"isn't": "ɪznt",
	"aren't": "ɑːnt",
	"wasn't": "wɒznt",
	"weren't": "wəːnt",
	"haven't": "hævnt",
	"hasn't": "hæznt",
	"didn't": "dɪdnt",
	"couldn't": "kʊdnt",
	"wouldn't": "wʊdnt",
	"shouldn't": "ʃʊdnt",
	"mustn't": "mʌsnt",
	"mightn't": "maɪtnt",
	"needn't": "niːdnt",
	"what's": "wɒts",
	"where's": "weəz",
	"that's": "ðæts",
	"who's": "huːz",
	"how's": "haʊz",
	"here's": "hɪəz",
	"there's": "ðeəz",
	"let's": "lets",
	# Ordinals
	"1st": "fɜːrst",
	"2nd": "sɛkənd",
	"3rd": "θɜːrd",
	"4th": "fɔːrθ",
	"5th": "fɪfθ",
	"6th": "sɪksθ",
	"7th": "sɛvənθ",
	"8th": "eɪtθ",
	"9th": "naɪnθ",
	"10th": "tɛnθ",
	# Stress the dictionary marks inconsistently
	"kite": "kaɪt",
	"creative": "kriːˈeɪtɪv",
	"horizon": "həˈraɪzn",
	"literature": "ˈlɪtərətʃər",
	"essays": "ˈɛseɪz",
	"paragraphs": "ˈpærəɡræfs",
}

# Everything but word characters and the apostrophe used by contractions
_EDGE_PUNCT = re.compile(r"^[^\w']+|[^\w']+$")


def clean_token(token: str) -> str:
	return _EDGE_PUNCT.sub("", token)


def base_form_candidates(word: str) -> List[str]:
	"""Possible uninflected forms of ``word``, most likely first."""
	candidates: List[str] = []
	if len(word) > 1 and word.endswith("s"):
		candidates.append(word[:-1])
	if len(word) > 2 and word.endswith("es"):
		candidates.append(word[:-2])
	if len(word) > 2 and word.endswith("ed"):
		candidates.append(word[:-2])
	if len(word) > 3 and word.endswith("ies"):
		candidates.append(word[:-3] + "y")
	if len(word) > 2 and word.endswith("d"):
		candidates.append(word[:-1])
	if len(word) > 3 and word.endswith("ing"):
		candidates.append(word[:-3])
		candidates.append(word[:-3] + "e")
	unique: List[str] = []
	for c in candidates:
		if c and c != word and c not in unique:
			unique.append(c)
	return unique


def normalize_ipa(raw: str) -> str:
	"""Strip enclosing ``/…/`` or ``[…]``, syllable hyphens and alternatives."""
	text = raw.strip()
	text = re.sub(r"^[\[/]", "", text)
	text = re.sub(r"[\]/]$", "", text)
	text = text.replace("-", "")
	text = re.sub(r"\s+", " ", text).strip()
	first = text.split(",")[0].strip()
	return first or text


def pick_transcription(candidates: List[str]) -> Optional[str]:
	if not candidates:
		return None
	chosen = next((c for c in candidates if "/" in c or "[" in c), candidates[0])
	return normalize_ipa(chosen) or None


class PhoneticAnnotator:
	def __init__(self, dictionary) -> None:
		self._dictionary = dictionary

	async def _lookup(self, term: str) -> Optional[str]:
		try:
			candidates = await self._dictionary.phonetics(term)
		except ProviderUnavailable as err:
			logger.debug("Dictionary lookup failed", extra={"term": term, "error": str(err)})
			return None
		return pick_transcription(candidates)

	async def word_ipa(self, word: str) -> str:
		term = word.lower()
		if term in MANUAL_IPA:
			return MANUAL_IPA[term]
		ipa = await self._lookup(term)
		if ipa:
			return ipa
		for base in base_form_candidates(term):
			ipa = await self._lookup(base)
			if ipa:
				return ipa
		return term

	async def annotate(self, text: str) -> Optional[str]:
		"""IPA for ``text`` wrapped in slashes, or ``None`` when it has no words."""
		words = [clean_token(t) for t in (text or "").split()]
		words = [w for w in words if w]
		if not words:
			return None
		resolved: Dict[str, str] = {}
		parts: List[str] = []
		for word in words:
			key = word.lower()
			if key not in resolved:
				resolved[key] = await self.word_ipa(key)
			parts.append(resolved[key])
		return f"/{' '.join(parts)}/"
