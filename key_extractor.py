"""Find translation lookups in a line of Ruby / ERB source.

Recognized call shapes:
	I18n.t("key")      I18n.t("key", count: 2)
	t("key")           t('key', name: user.name)
	i18n.t["key"]      I18n.t["key"]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import re

_CALL_PATTERNS = [
	re.compile(r"""I18n\.t\s*\(\s*["']([^"']+)["']\s*\)"""),
	re.compile(r"""I18n\.t\s*\(\s*["']([^"']+)["']\s*,.+?\)"""),
	re.compile(r"""(?<![\w.])t\s*\(\s*["']([^"']+)["']\s*\)"""),
	re.compile(r"""(?<![\w.])t\s*\(\s*["']([^"']+)["']\s*,.+?\)"""),
	re.compile(r"""(?:i18n|I18n)\.t\s*\[\s*["']([^"']+)["']\s*\]"""),
]
# bare "a.b.c" literal on a line that also holds a lookup call
_DOTTED_LITERAL = re.compile(r"""["']([^"'.]+\.[^"'.]+\.[^"'.]+)["']""")
_TRIGGER_RE = re.compile(r"""(?:I18n\.t|(?<![\w.])t)\(\s*["'][^"']*$""")


@dataclass(frozen=True, slots=True)
class KeyCall:
	key: str
	start: int
	end: int


def has_lookup_call(line: str) -> bool:
	return "I18n.t" in line or "i18n.t[" in line or "t(" in line


def find_calls(line: str) -> list[KeyCall]:
	"""Every lookup call on the line, ordered by start column."""
	calls: dict[int, KeyCall] = {}
	for pattern in _CALL_PATTERNS:
		for match in pattern.finditer(line):
			key_start = match.start(1)
			# the same call can match several shapes; keep the first
			if key_start not in calls:
				calls[key_start] = KeyCall(match.group(1), match.start(), match.end())
	return sorted(calls.values(), key=lambda call: call.start)


def key_at(line: str, column: int) -> Optional[str]:
	"""Key of the call under column, else of the nearest call."""
	calls = find_calls(line)
	for call in calls:
		if call.start <= column <= call.end:
			return call.key
	if not calls:
		return None
	nearest = min(calls, key=lambda call: abs(column - (call.start + call.end) / 2))
	return nearest.key


def key_in_line(line: str) -> Optional[str]:
	"""First key found anywhere on a line that contains a lookup call."""
	if not has_lookup_call(line):
		return None
	calls = find_calls(line)
	if calls:
		return calls[0].key
	match = _DOTTED_LITERAL.search(line)
	return match.group(1) if match else None


def extract_key(line: str, column: int, word: Optional[str] = None) -> Optional[str]:
	"""Key for an editor position.

	word is the dotted word under the cursor, used as a last resort on
	lines that contain a lookup call.
	"""
	key = key_at(line, column) or key_in_line(line)
	if key is None and word and "." in word and has_lookup_call(line):
		key = word
	return key


def is_lookup_prefix(prefix: str) -> bool:
	"""True when the text before the cursor is inside an open lookup string."""
	return bool(_TRIGGER_RE.search(prefix))


__all__ = [
	"KeyCall",
	"find_calls",
	"key_at",
	"key_in_line",
	"extract_key",
	"is_lookup_prefix",
	"has_lookup_call",
]
