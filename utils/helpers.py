"""Helper functions and constants shared by the parsers and the resolver."""
import re

import utils.exceptions as locale_exceptions

MAX_KEY_LENGTH = 200
NULL_MARKERS: frozenset[str] = frozenset({"~", "null", "Null", "NULL"})
DYNAMIC_MARKER = "#{"

_LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2}$", re.IGNORECASE)
_FILENAME_LANGUAGE_RE = re.compile(r"^([a-z]{2})[._]", re.IGNORECASE)
_LANGUAGE_PREFIX_RE = re.compile(r"^([a-z]{2})\.(.+)$", re.IGNORECASE)
# "  key: rest" ; the key stops at the first colon
_KEY_LINE_RE = re.compile(r"^(?P<indent>\s*)(?P<key>[^:]+):(?P<rest>.*)$")
# " # note" after a plain value; "#{" opens an interpolation, not a comment
_INLINE_COMMENT_RE = re.compile(r"\s+#(?!\{).*$")


def normalize_locale(raw: str | None, default: str = "en") -> str:
	"""Normalize environment LANG variants to a simple language code.

	Examples:
	  "en_US.UTF-8" -> "en"
	  "ko-KR" -> "ko"
	  "ja" -> "ja"
	  None / empty -> default
	"""
	if not raw:
		return default
	raw = raw.strip()
	if not raw:
		return default
	# Drop encoding part
	if "." in raw:
		raw = raw.split(".", 1)[0]
	raw = raw.lower().replace("-", "_")
	if "_" in raw:
		raw = raw.split("_", 1)[0]
	return raw or default


def is_language_code(text: str) -> bool:
	"""True for a bare two-letter code such as 'ko' or 'EN'."""
	return bool(_LANGUAGE_CODE_RE.match(text))


def language_from_filename(file_name: str) -> str | None:
	"""Language code from a file name like 'ko.views.yml' or 'en_admin.yml'."""
	match = _FILENAME_LANGUAGE_RE.match(file_name)
	return match.group(1).lower() if match else None


def split_language_prefix(key: str) -> tuple[str, str] | None:
	"""Split 'en.user.name' into ('en', 'user.name'); None if no such prefix."""
	match = _LANGUAGE_PREFIX_RE.match(key)
	if not match:
		return None
	return match.group(1).lower(), match.group(2)


def collapse_duplicate_segments(key: str) -> str:
	"""Drop empty segments and collapse adjacent repeats ('a.a.b' -> 'a.b')."""
	parts: list[str] = []
	for part in key.split("."):
		if not part or (parts and parts[-1] == part):
			continue
		parts.append(part)
	return ".".join(parts)


def check_key_length(key: str, limit: int = MAX_KEY_LENGTH) -> str:
	"""Return key unchanged.

	Raises:
		OversizedKeyError: If the key is longer than limit.
	"""
	if len(key) > limit:
		raise locale_exceptions.OversizedKeyError(key, limit)
	return key


def parse_value(raw: str) -> str | None:
	"""Interpret a raw scalar token from a locale line.

	One layer of matching quotes is stripped, so '""' gives an empty string.
	Returns None when nothing is left after trimming.
	"""
	text = raw.strip()
	if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
		return text[1:-1]
	if text:
		return text
	return None


def scalar_to_text(value) -> str:
	"""Stringify a YAML leaf the way it reads in the file."""
	if isinstance(value, bool):
		return "true" if value else "false"
	return str(value)


def has_inline_value(rest: str) -> bool:
	"""True if the text after 'key:' holds a value on the same line."""
	rest = rest.strip()
	return bool(rest) and not rest.startswith("#") and rest not in NULL_MARKERS


def split_key_line(line: str) -> tuple[int, str, str] | None:
	"""Split a locale line into (indent, key, rest).

	Blank lines, comments and sequence items give None. Surrounding quotes
	on the key are removed.
	"""
	stripped = line.strip()
	if not stripped or stripped.startswith(("#", "-")):
		return None
	match = _KEY_LINE_RE.match(line.rstrip())
	if not match:
		return None
	key = match.group("key").strip().strip("\"'")
	if not key:
		return None
	return len(match.group("indent")), key, match.group("rest")


def is_dynamic_key(key: str) -> bool:
	"""True if the key embeds a Ruby interpolation like '#{type}'."""
	return DYNAMIC_MARKER in key


def dynamic_base_key(key: str) -> str:
	"""Static part of a dynamic key: 'user.#{kind}.title' -> 'user'."""
	base = key.split(DYNAMIC_MARKER, 1)[0]
	return base[:-1] if base.endswith(".") else base


def strip_inline_comment(rest: str) -> str:
	"""Drop a trailing ' # comment' from the text after 'key:'.

	A '#' inside a quoted value is kept.
	"""
	text = rest.strip()
	if text[:1] in ("'", '"'):
		end = text.find(text[0], 1)
		if end != -1 and text[end + 1:].lstrip().startswith("#"):
			return text[:end + 1]
		return text
	return _INLINE_COMMENT_RE.sub("", text)
