"""Key resolution for editor features (hover, completion, go to definition).

The resolver works on one LocaleIndex snapshot at a time. Hook it to a
scanner so each finished scan swaps the snapshot in:

	resolver = KeyResolver(priority_languages=settings.priority_languages)
	scanner.subscribe(resolver.swap)

Languages are ranked by the priority list first (in the given order), then
alphabetically; entries without a language come last.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import logging

from locale_index import Entry, LocaleIndex
from settings import DEFAULT_PRIORITY_LANGUAGES
from utils import dynamic_base_key, is_dynamic_key, split_language_prefix

DISPLAY_LIMIT = 3

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Location:
	"""Jump target: file path and 0-based line."""
	path: str
	line: int
	entry: Entry


@dataclass(frozen=True, slots=True)
class Completion:
	label: str
	detail: str
	sort_text: str
	entry: Entry


class KeyResolver:
	"""Exact, dynamic and cross-language lookups with language ranking."""

	def __init__(self, index: LocaleIndex | None = None, priority_languages: Iterable[str] = DEFAULT_PRIORITY_LANGUAGES):
		self.index = index if index is not None else LocaleIndex()
		self.priority_languages = list(priority_languages)

	def swap(self, index: LocaleIndex) -> None:
		"""Replace the snapshot used by later lookups."""
		self.index = index

	@property
	def is_empty(self) -> bool:
		"""True before the first scan (or when a scan found nothing)."""
		return len(self.index) == 0

	def language_codes(self) -> list[str]:
		"""Languages present in the index, priority ones first."""
		present = self.index.languages()
		ordered = [code for code in self.priority_languages if code in present]
		return ordered + sorted(present - set(ordered))

	def _language_rank(self, codes: list[str]):
		def rank(entry: Entry) -> int:
			if entry.language is None:
				return len(codes) + 1
			if entry.language in codes:
				return codes.index(entry.language)
			return len(codes)
		return rank

	def order_by_language(self, entries: Iterable[Entry]) -> list[Entry]:
		"""Stable sort of entries by language rank."""
		return sorted(entries, key=self._language_rank(self.language_codes()))

	# ---------------- Lookups ----------------
	def find_by_key(self, key: str) -> list[Entry]:
		return self.index.find_by_key(key)

	def find_exact_key(self, key: str, preferred_language: Optional[str] = None) -> Optional[Entry]:
		return self.index.find_exact_key(key, preferred_language)

	def resolve_for_display(self, key: str) -> list[Entry]:
		"""Entries to show for a key under the cursor.

		An exact key gives its translation in every language, ranked. A
		dynamic key with no exact hit gives the shortest (most general)
		entries under its static part, at most DISPLAY_LIMIT of them.
		"""
		index = self.index
		matches = index.exact(key)
		if matches:
			return self.order_by_language(matches)
		if not is_dynamic_key(key):
			return []
		base = dynamic_base_key(key)
		if not base:
			return []
		related = sorted(index.with_prefix(base), key=lambda entry: len(entry.key))
		logger.debug("Dynamic key %s: %d entries under %s", key, len(related), base)
		return related[:DISPLAY_LIMIT]

	def resolve_alternative(self, key: str, language_codes: Optional[list[str]] = None) -> list[Entry]:
		"""Retry a missed key with its language segment removed or added.

		'ko.user.name' is retried as 'user.name' when 'ko' is a known
		language; any other key is retried as '<code>.<key>' for each known
		code in order until one matches.
		"""
		return self._alternative_matches(key, language_codes, lambda entry: True)

	def _alternative_matches(
		self,
		key: str,
		language_codes: Optional[list[str]],
		keep: Callable[[Entry], bool],
	) -> list[Entry]:
		codes = self.language_codes() if language_codes is None else list(language_codes)
		split = split_language_prefix(key)
		if split is not None and split[0] in codes:
			logger.debug("Retrying %s without its language segment", key)
			return [entry for entry in self.find_by_key(split[1]) if keep(entry)]
		for code in codes:
			matches = [entry for entry in self.find_by_key(f"{code}.{key}") if keep(entry)]
			if matches:
				logger.debug("Resolved %s as %s.%s", key, code, key)
				return matches
		return []

	def find_definitions(self, key: str) -> list[Location]:
		"""Source locations for key, trying the alternative spellings on a miss.

		The first language whose match carries a line number wins.
		"""
		def has_line(entry: Entry) -> bool:
			return entry.source_line is not None

		located = [entry for entry in self.index.exact(key) if has_line(entry)]
		if not located:
			located = self._alternative_matches(key, None, has_line)
		return [
			Location(path=entry.source_file, line=max(0, entry.source_line - 1), entry=entry)
			for entry in located
		]

	def completion_candidates(self) -> list[Completion]:
		"""Every entry as a completion item, ordered by language rank then key."""
		codes = self.language_codes()
		rank = self._language_rank(codes)
		items = []
		for entry in self.index:
			lang_info = f"[{entry.language}] " if entry.language else ""
			items.append(Completion(
				label=entry.key,
				detail=f"{lang_info}{entry.value}",
				sort_text=f"{rank(entry)}-{entry.key}",
				entry=entry,
			))
		items.sort(key=lambda item: (rank(item.entry), item.label))
		return items


__all__ = ["KeyResolver", "Location", "Completion", "DISPLAY_LIMIT"]
