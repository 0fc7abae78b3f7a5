"""Tests for key_extractor module"""
import unittest

from key_extractor import extract_key, find_calls, is_lookup_prefix, key_at, key_in_line


class TestKeyExtractor(unittest.TestCase):
	"""Test finding lookup keys in source lines"""

	def test_find_calls(self):
		line = '<%= t("users.title") %> <%= I18n.t(\'users.count\', count: 2) %>'
		self.assertEqual([call.key for call in find_calls(line)], ["users.title", "users.count"])

	def test_bracket_calls(self):
		self.assertEqual([c.key for c in find_calls('I18n.t["menu.home"]')], ["menu.home"])

	def test_method_names_ending_in_t_are_ignored(self):
		self.assertEqual(find_calls('format("a.b.c")'), [])

	def test_key_at_cursor(self):
		"""Test the call under the cursor wins over the first call"""
		line = 't("first.key") + t("second.key")'
		self.assertEqual(key_at(line, 2), "first.key")
		self.assertEqual(key_at(line, line.index("second")), "second.key")

	def test_key_at_nearest_call(self):
		line = 'x = t("only.key")' + " " * 20
		self.assertEqual(key_at(line, len(line) - 1), "only.key")
		self.assertIsNone(key_at("plain text", 3))

	def test_key_in_line_dotted_literal(self):
		line = 'label = t(:x) || "pages.home.title"'
		self.assertEqual(key_in_line(line), "pages.home.title")
		self.assertIsNone(key_in_line('"pages.home.title"'))

	def test_extract_key_word_fallback(self):
		self.assertEqual(extract_key("t(var) # users.edit", 15, word="users.edit"), "users.edit")
		self.assertIsNone(extract_key("users.edit", 3, word="users.edit"))

	def test_dynamic_keys_are_kept_whole(self):
		self.assertEqual(key_in_line('t("user.greeting.#{kind}")'), "user.greeting.#{kind}")

	def test_is_lookup_prefix(self):
		self.assertTrue(is_lookup_prefix('I18n.t("users.'))
		self.assertTrue(is_lookup_prefix("<%= t('"))
		self.assertFalse(is_lookup_prefix('I18n.t("done")'))
		self.assertFalse(is_lookup_prefix("format('"))


if __name__ == "__main__":
	unittest.main()
