"""Tests for utils.helpers"""
import unittest

from utils import (
	check_key_length,
	collapse_duplicate_segments,
	dynamic_base_key,
	has_inline_value,
	is_language_code,
	language_from_filename,
	normalize_locale,
	parse_value,
	scalar_to_text,
	split_key_line,
	split_language_prefix,
	strip_inline_comment,
)
from utils.exceptions import OversizedKeyError


class TestHelpers(unittest.TestCase):
	"""Test helper functions"""

	def test_normalize_locale(self):
		"""Test locale normalization"""
		self.assertEqual(normalize_locale("en_US.UTF-8"), "en")
		self.assertEqual(normalize_locale("ko-KR"), "ko")
		self.assertEqual(normalize_locale("JA"), "ja")
		self.assertEqual(normalize_locale(None), "en")
		self.assertEqual(normalize_locale("  "), "en")

	def test_parse_value(self):
		"""Test quote stripping and empty values"""
		self.assertEqual(parse_value('"Hello"'), "Hello")
		self.assertEqual(parse_value("'Hi there'"), "Hi there")
		self.assertEqual(parse_value('  plain text  '), "plain text")
		self.assertEqual(parse_value('""'), "")
		self.assertIsNone(parse_value("   "))
		# mismatched quotes are kept as written
		self.assertEqual(parse_value('"open'), '"open')
		self.assertEqual(parse_value('"'), '"')

	def test_language_from_filename(self):
		"""Test language inference from file names"""
		self.assertEqual(language_from_filename("ko.yml"), "ko")
		self.assertEqual(language_from_filename("EN_admin.yml"), "en")
		self.assertEqual(language_from_filename("ja.views.yaml"), "ja")
		self.assertIsNone(language_from_filename("messages.yml"))
		self.assertIsNone(language_from_filename("enx.yml"))

	def test_is_language_code(self):
		self.assertTrue(is_language_code("ko"))
		self.assertTrue(is_language_code("EN"))
		self.assertFalse(is_language_code("eng"))
		self.assertFalse(is_language_code("e1"))

	def test_split_language_prefix(self):
		self.assertEqual(split_language_prefix("EN.user.name"), ("en", "user.name"))
		self.assertIsNone(split_language_prefix("user.name"))
		self.assertIsNone(split_language_prefix("en"))

	def test_collapse_duplicate_segments(self):
		"""Test duplicate segment normalization"""
		self.assertEqual(collapse_duplicate_segments("a.a.b"), "a.b")
		self.assertEqual(collapse_duplicate_segments("a.b.b.b.c"), "a.b.c")
		self.assertEqual(collapse_duplicate_segments("a.b.a"), "a.b.a")
		self.assertEqual(collapse_duplicate_segments(".a..b."), "a.b")

	def test_check_key_length(self):
		self.assertEqual(check_key_length("a.b"), "a.b")
		with self.assertRaises(OversizedKeyError):
			check_key_length("k" * 201)

	def test_scalar_to_text(self):
		self.assertEqual(scalar_to_text(True), "true")
		self.assertEqual(scalar_to_text(3), "3")
		self.assertEqual(scalar_to_text(1.5), "1.5")

	def test_split_key_line(self):
		self.assertEqual(split_key_line("  title: Hello"), (2, "title", " Hello"))
		self.assertEqual(split_key_line('"quoted": x'), (0, "quoted", " x"))
		self.assertIsNone(split_key_line("# comment: no"))
		self.assertIsNone(split_key_line("  - item: x"))
		self.assertIsNone(split_key_line("   "))

	def test_has_inline_value(self):
		self.assertTrue(has_inline_value(" hello"))
		self.assertFalse(has_inline_value("   "))
		self.assertFalse(has_inline_value(" ~"))
		self.assertFalse(has_inline_value(" # note"))

	def test_strip_inline_comment(self):
		self.assertEqual(strip_inline_comment(" Fine # note"), "Fine")
		self.assertEqual(strip_inline_comment(" 'it # stays' # note"), "'it # stays'")
		self.assertEqual(strip_inline_comment(" Hi #{name}"), "Hi #{name}")
		self.assertEqual(strip_inline_comment(" # heading"), "# heading")
		self.assertEqual(strip_inline_comment(" \"unterminated # x"), "\"unterminated # x")

	def test_dynamic_base_key(self):
		self.assertEqual(dynamic_base_key("user.greeting.#{type}"), "user.greeting")
		self.assertEqual(dynamic_base_key("status_#{s}"), "status_")
		self.assertEqual(dynamic_base_key("#{x}"), "")


if __name__ == "__main__":
	unittest.main()
