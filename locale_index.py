"""Translation entries and the immutable index built from them.

A scan produces a flat list of Entry objects; post_process cleans that list
up once (language prefixes pulled out of keys, one entry per language/key
pair) and LocaleIndex wraps the result for lookups. An index is never
modified after construction: a new scan builds a new one.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Optional

from utils import (
	collapse_duplicate_segments,
	dynamic_base_key,
	is_dynamic_key,
	split_language_prefix,
)

UNKNOWN_LANGUAGE = "unknown"


@dataclass(frozen=True, slots=True)
class Entry:
	key: str
	value: str
	source_file: str
	language: Optional[str] = None
	source_line: Optional[int] = None    # 1-based, best effort


def normalize_language_keys(entries: Iterable[Entry]) -> list[Entry]:
	"""Move a leading 'xx.' language segment out of the key.

	'en.user.name' becomes key 'user.name' with language 'en', replacing
	whatever language the entry carried before.
	"""
	normalized: list[Entry] = []
	for entry in entries:
		split = split_language_prefix(entry.key)
		if split is None:
			normalized.append(entry)
			continue
		language, key = split
		normalized.append(replace(entry, key=collapse_duplicate_segments(key), language=language))
	return normalized


def deduplicate(entries: Iterable[Entry]) -> list[Entry]:
	"""Keep one entry per (language, key); the last one seen wins."""
	unique: dict[tuple[str, str], Entry] = {}
	for entry in entries:
		unique[(entry.language or UNKNOWN_LANGUAGE, entry.key)] = entry
	return list(unique.values())


def post_process(entries: Iterable[Entry]) -> list[Entry]:
	"""Normalize then deduplicate, so the final list has unique pairs."""
	return deduplicate(normalize_language_keys(entries))


class LocaleIndex(Sequence):
	"""Read-only snapshot of every entry found by one scan."""

	def __init__(self, entries: Iterable[Entry] = ()):
		self._entries: tuple[Entry, ...] = tuple(entries)
		by_key: dict[str, list[Entry]] = defaultdict(list)
		for entry in self._entries:
			by_key[entry.key].append(entry)
		self._by_key = dict(by_key)

	def __len__(self) -> int:
		return len(self._entries)

	def __getitem__(self, item):
		return self._entries[item]

	def __repr__(self) -> str:
		return f"LocaleIndex({len(self._entries)} entries)"

	def get_entries(self) -> list[Entry]:
		return list(self._entries)

	def get_entries_by_language(self, language: str) -> list[Entry]:
		return [entry for entry in self._entries if entry.language == language]

	def languages(self) -> set[str]:
		"""Every language code carried by at least one entry."""
		return {entry.language for entry in self._entries if entry.language}

	def language_statistics(self) -> dict[str, int]:
		"""Entry count per language; entries without one count as 'unknown'."""
		stats: dict[str, int] = {}
		for entry in self._entries:
			lang = entry.language or UNKNOWN_LANGUAGE
			stats[lang] = stats.get(lang, 0) + 1
		return stats

	def exact(self, key: str) -> list[Entry]:
		"""Entries whose key equals key, in every language."""
		return list(self._by_key.get(key, ()))

	def with_prefix(self, prefix: str) -> list[Entry]:
		return [entry for entry in self._entries if entry.key.startswith(prefix)]

	def find_by_key(self, key: str) -> list[Entry]:
		"""Exact matches, or for a dynamic key the single closest entry.

		'user.greeting.#{type}' falls back to entries starting with
		'user.greeting' and keeps the one whose key length is nearest to the
		lookup key's length (first one on ties). Never raises; an unmatched
		key gives an empty list.
		"""
		matches = self.exact(key)
		if matches or not is_dynamic_key(key):
			return matches
		base = dynamic_base_key(key)
		if not base:
			return []
		candidates = self.with_prefix(base)
		if not candidates:
			return []
		return [min(candidates, key=lambda entry: abs(len(entry.key) - len(key)))]

	def find_exact_key(self, key: str, preferred_language: str | None = None) -> Entry | None:
		"""One entry for key, in preferred_language when there is one."""
		matches = self._by_key.get(key, ())
		if preferred_language:
			for entry in matches:
				if entry.language == preferred_language:
					return entry
		return matches[0] if matches else None


__all__ = [
	"Entry",
	"LocaleIndex",
	"normalize_language_keys",
	"deduplicate",
	"post_process",
]
