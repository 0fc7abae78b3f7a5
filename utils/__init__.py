"""
Public helper functions and constants.
"""
from utils.helpers import (
	MAX_KEY_LENGTH,
	NULL_MARKERS,
	normalize_locale,
	is_language_code,
	language_from_filename,
	split_language_prefix,
	collapse_duplicate_segments,
	check_key_length,
	parse_value,
	scalar_to_text,
	has_inline_value,
	split_key_line,
	strip_inline_comment,
	is_dynamic_key,
	dynamic_base_key,
)

__all__ = [
	"MAX_KEY_LENGTH",
	"NULL_MARKERS",
	"normalize_locale",
	"is_language_code",
	"language_from_filename",
	"split_language_prefix",
	"collapse_duplicate_segments",
	"check_key_length",
	"parse_value",
	"scalar_to_text",
	"has_inline_value",
	"split_key_line",
	"strip_inline_comment",
	"is_dynamic_key",
	"dynamic_base_key",
]
