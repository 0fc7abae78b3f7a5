"""Line positions of translation keys inside a locale file.

Two sources feed the same table shape (dotted path -> 1-based line):

 - extract_positions: an indentation walk over the raw text. Works on any
   text, including files the YAML reader rejects, but only sees keys that
   carry an inline value.
 - node_positions: the start marks of the composed YAML node tree. Exact,
   but only available when the document parsed.

find_line resolves a flattened key against either table, degrading to
suffix matches when the exact path is unknown.
"""
from __future__ import annotations

from typing import Optional
import yaml

from utils import has_inline_value, split_key_line

_NULL_TAG = "tag:yaml.org,2002:null"
_MERGE_TAG = "tag:yaml.org,2002:merge"


def extract_positions(text: str) -> dict[str, int]:
	"""Map each dotted key path to the first line where it gets a value.

	The stack holds (indent, key) pairs; a line closes every open key
	indented at or beyond its own column.
	"""
	positions: dict[str, int] = {}
	stack: list[tuple[int, str]] = []
	for line_no, line in enumerate(text.splitlines(), start=1):
		parts = split_key_line(line)
		if parts is None:
			continue
		indent, key, rest = parts
		while stack and stack[-1][0] >= indent:
			stack.pop()
		stack.append((indent, key))
		if has_inline_value(rest):
			positions.setdefault(".".join(k for _, k in stack), line_no)
	return positions


def node_positions(node: Optional[yaml.Node]) -> dict[str, int]:
	"""Key lines taken from a composed YAML node tree."""
	positions: dict[str, int] = {}
	if node is not None:
		_walk_node(node, (), positions)
	return positions


def _walk_node(node: yaml.Node, path: tuple[str, ...], out: dict[str, int]) -> None:
	if isinstance(node, yaml.MappingNode):
		children = [
			(str(key_node.value), key_node.start_mark.line + 1, value_node)
			for key_node, value_node in node.value
			if key_node.tag != _MERGE_TAG
		]
	elif isinstance(node, yaml.SequenceNode):
		children = [
			(str(i), item.start_mark.line + 1, item)
			for i, item in enumerate(node.value)
		]
	else:
		return
	for segment, line_no, child in children:
		child_path = path + (segment,)
		if isinstance(child, yaml.ScalarNode):
			if child.tag != _NULL_TAG:
				out.setdefault(".".join(child_path), line_no)
		else:
			_walk_node(child, child_path, out)


def _has_segment_suffix(path: str, suffix: str) -> bool:
	return path == suffix or path.endswith("." + suffix)


def find_line(positions: dict[str, int] | None, key: str) -> int | None:
	"""Best-effort line for a dotted key.

	Order: exact path, then the first recorded path ending with the last two
	segments, then the first one ending with the last segment. Iteration
	follows the table's insertion order, so the earliest declaration wins.
	"""
	if not positions or not key:
		return None
	if key in positions:
		return positions[key]

	segments = key.split(".")
	suffixes = []
	if len(segments) > 1:
		suffixes.append(".".join(segments[-2:]))
	suffixes.append(segments[-1])
	for suffix in suffixes:
		for path, line_no in positions.items():
			if _has_segment_suffix(path, suffix):
				return line_no
	return None
