"""Turn one YAML locale file into flat translation entries.

Usage:
	from locale_parser import parse_locale_text
	entries = parse_locale_text(text, "/app/config/locales/ko.yml")

Nested keys are joined with dots. A top-level two-letter key holding a
mapping (``ko:`` in Rails files) scopes everything below it to that
language instead of becoming part of the key. When the YAML reader rejects
the file, a line-based parser recovers whatever key/value lines it can so
one broken block does not hide the rest of the file.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator, Optional
import logging
import re

import yaml

from locale_index import Entry
from positions import extract_positions, find_line, node_positions
import utils.exceptions as locale_exceptions
from utils import (
	check_key_length,
	collapse_duplicate_segments,
	has_inline_value,
	is_language_code,
	language_from_filename,
	parse_value,
	scalar_to_text,
	split_key_line,
	strip_inline_comment,
)

logger = logging.getLogger(__name__)


class LocaleLoader(yaml.SafeLoader):
	"""SafeLoader reading scalars the way Rails locale files mean them.

	Only true/false are booleans (so ``no:`` stays the Norwegian key) and
	dates stay text.
	"""


LocaleLoader.yaml_implicit_resolvers = {
	first: [
		(tag, regexp) for tag, regexp in resolvers
		if tag not in ("tag:yaml.org,2002:bool", "tag:yaml.org,2002:timestamp")
	]
	for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
LocaleLoader.add_implicit_resolver(
	"tag:yaml.org,2002:bool",
	re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
	list("tTfF"),
)


def load_document(text: str, source_file: str = "<string>") -> tuple[Any, dict[str, int]]:
	"""Parse a single YAML document.

	Returns the constructed data and the key lines read from the node tree.

	Raises:
		LocaleParseError: If the text is not a single valid YAML document.
	"""
	try:
		loader = LocaleLoader(text)
		try:
			node = loader.get_single_node()
			data = loader.construct_document(node) if node is not None else None
		finally:
			loader.dispose()
	except yaml.YAMLError as err:
		mark = getattr(err, "problem_mark", None)
		line = mark.line + 1 if mark is not None else None
		column = mark.column + 1 if mark is not None else None
		problem = getattr(err, "problem", None) or str(err)
		raise locale_exceptions.LocaleParseError(source_file, problem, line, column) from err
	except (ValueError, KeyError, TypeError) as err:
		# bad explicit tags such as "!!int abc" fail inside the constructors
		raise locale_exceptions.LocaleParseError(source_file, f"cannot construct value: {err}") from err
	return data, node_positions(node)


def _children(value: Any) -> Iterator[tuple[str, Any]]:
	if isinstance(value, Mapping):
		for key, child in value.items():
			yield str(key), child
	else:
		for i, child in enumerate(value):
			yield str(i), child


def _language_roots(tree: Mapping) -> list[tuple[str, Mapping]]:
	return [
		(str(key), value) for key, value in tree.items()
		if is_language_code(str(key)) and isinstance(value, Mapping)
	]


def flatten_tree(
	tree: Mapping,
	source_file: str,
	language: Optional[str] = None,
	positions: Optional[dict[str, int]] = None,
) -> list[Entry]:
	"""Flatten a parsed locale mapping into entries.

	language is the hint for keys outside any language root; when missing it
	is taken from the file name. positions maps document paths to lines (see
	positions.py). The input mapping is left untouched.
	"""
	if language is None:
		language = language_from_filename(Path(source_file).name)
	out: list[Entry] = []

	roots = _language_roots(tree)
	for root_key, subtree in roots:
		_flatten_into(out, subtree, "", (root_key,), source_file, root_key.lower(), positions)

	consumed = {root_key for root_key, _ in roots}
	rest = {key: value for key, value in tree.items() if str(key) not in consumed}
	_flatten_into(out, rest, "", (), source_file, language, positions)
	return out


def _flatten_into(
	out: list[Entry],
	node: Any,
	prefix: str,
	path: tuple[str, ...],
	source_file: str,
	language: Optional[str],
	positions: Optional[dict[str, int]],
) -> None:
	for segment, value in _children(node):
		new_key = collapse_duplicate_segments(f"{prefix}.{segment}" if prefix else segment)
		child_path = path + (segment,)
		if isinstance(value, (Mapping, list)):
			_flatten_into(out, value, new_key, child_path, source_file, language, positions)
			continue
		if not isinstance(value, (str, int, float)) or not new_key:
			continue
		try:
			check_key_length(new_key)
		except locale_exceptions.OversizedKeyError as err:
			logger.warning("Skipping entry in %s: %s", source_file, err)
			continue
		out.append(Entry(
			key=new_key,
			value=scalar_to_text(value),
			source_file=source_file,
			language=language,
			source_line=find_line(positions, ".".join(child_path)),
		))


def parse_fallback(text: str, source_file: str, language: Optional[str] = None) -> list[Entry]:
	"""Recover entries line by line from text the YAML reader rejected.

	Keys without an inline value open a section; keys with one become an
	entry carrying the exact line number. A dedent closes every section
	opened at or beyond the new column.
	"""
	if language is None:
		language = language_from_filename(Path(source_file).name)
	entries: list[Entry] = []
	sections: list[tuple[int, str]] = []

	for line_no, line in enumerate(text.splitlines(), start=1):
		parts = split_key_line(line)
		if parts is None:
			continue
		indent, key, rest = parts
		rest = strip_inline_comment(rest)
		while sections and sections[-1][0] >= indent:
			sections.pop()

		if not has_inline_value(rest):
			sections.append((indent, key))
			continue
		value = parse_value(rest)
		if value is None:
			continue
		full_key = collapse_duplicate_segments(".".join([name for _, name in sections] + [key]))
		try:
			check_key_length(full_key)
		except locale_exceptions.OversizedKeyError as err:
			logger.warning("Skipping recovered entry in %s: %s", source_file, err)
			continue
		entries.append(Entry(
			key=full_key,
			value=value,
			source_file=source_file,
			language=language,
			source_line=line_no,
		))
	return entries


def parse_locale_text(text: str, source_file: str, language: Optional[str] = None) -> list[Entry]:
	"""Entries for one file: structured parse first, line recovery second."""
	try:
		tree, node_lines = load_document(text, source_file)
	except locale_exceptions.LocaleParseError as err:
		logger.warning("%s; recovering entries line by line", err)
		entries = parse_fallback(text, source_file, language)
		logger.debug("Recovered %d entries from %s", len(entries), source_file)
		return entries

	if not isinstance(tree, Mapping):
		logger.debug("No mapping at the root of %s, nothing to index", source_file)
		return []

	positions = extract_positions(text)
	positions.update(node_lines)
	return flatten_tree(tree, source_file, language, positions)


__all__ = [
	"LocaleLoader",
	"load_document",
	"flatten_tree",
	"parse_fallback",
	"parse_locale_text",
]
