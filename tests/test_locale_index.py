"""Tests for locale_index module"""
import unittest

from locale_index import Entry, LocaleIndex, deduplicate, normalize_language_keys, post_process


def make_entry(key, value="v", language=None, source_file="/locales/x.yml", source_line=None):
	return Entry(key=key, value=value, source_file=source_file, language=language, source_line=source_line)


class TestPostProcess(unittest.TestCase):
	"""Test normalization and deduplication"""

	def test_language_in_key_without_language(self):
		"""Test 'en.user.name' gets its language from the key"""
		(entry,) = normalize_language_keys([make_entry("en.user.name")])
		self.assertEqual((entry.key, entry.language), ("user.name", "en"))

	def test_language_in_key_overrides_stored_language(self):
		(entry,) = normalize_language_keys([make_entry("EN.title", language="ko")])
		self.assertEqual((entry.key, entry.language), ("title", "en"))

	def test_redundant_language_in_key_is_stripped(self):
		(entry,) = normalize_language_keys([make_entry("ko.title", language="ko")])
		self.assertEqual((entry.key, entry.language), ("title", "ko"))

	def test_other_keys_untouched(self):
		original = make_entry("user.name", language="ko")
		self.assertIs(normalize_language_keys([original])[0], original)

	def test_deduplicate_last_wins(self):
		first = make_entry("x.y", "old", "en", "/a/en.yml")
		second = make_entry("x.y", "new", "en", "/b/en.yml")
		other = make_entry("x.y", "autre", "fr")
		result = deduplicate([first, other, second])
		self.assertEqual(result, [second, other])

	def test_deduplicate_unknown_language(self):
		result = deduplicate([make_entry("a", "1"), make_entry("a", "2")])
		self.assertEqual([e.value for e in result], ["2"])

	def test_post_process_unique_pairs(self):
		"""Test normalization cannot leave duplicate pairs behind"""
		entries = [make_entry("en.title", "prefixed"), make_entry("title", "plain", "en")]
		result = post_process(entries)
		self.assertEqual(len(result), 1)
		self.assertEqual(result[0].value, "plain")


class TestLocaleIndex(unittest.TestCase):
	"""Test lookups on an index snapshot"""

	def setUp(self):
		self.index = LocaleIndex([
			make_entry("user.greeting.formal", "Good day", "en"),
			make_entry("user.greeting.casual", "Hey", "en"),
			make_entry("user.name", "Name", "en"),
			make_entry("user.name", "이름", "ko"),
			make_entry("title", "?"),
		])

	def test_sequence_protocol(self):
		self.assertEqual(len(self.index), 5)
		self.assertEqual(self.index[0].key, "user.greeting.formal")
		self.assertEqual(len(self.index.get_entries()), 5)

	def test_entries_by_language(self):
		self.assertEqual([e.value for e in self.index.get_entries_by_language("ko")], ["이름"])

	def test_language_statistics(self):
		self.assertEqual(self.index.language_statistics(), {"en": 3, "ko": 1, "unknown": 1})

	def test_find_by_key_exact(self):
		self.assertEqual([e.language for e in self.index.find_by_key("user.name")], ["en", "ko"])

	def test_find_by_key_dynamic(self):
		"""Test a dynamic key returns one entry under its static prefix"""
		result = self.index.find_by_key("user.greeting.#{type}")
		self.assertEqual(len(result), 1)
		self.assertTrue(result[0].key.startswith("user.greeting"))
		# both candidates are equally close; the first one wins
		self.assertEqual(result[0].key, "user.greeting.formal")

	def test_find_by_key_dynamic_closest_length(self):
		index = LocaleIndex([make_entry("a.long.nested.key"), make_entry("a.bc")])
		self.assertEqual(index.find_by_key("a.#{x}")[0].key, "a.bc")

	def test_find_by_key_misses(self):
		self.assertEqual(self.index.find_by_key("nope"), [])
		self.assertEqual(self.index.find_by_key("nope.#{x}"), [])
		self.assertEqual(self.index.find_by_key("#{x}"), [])

	def test_find_exact_key(self):
		self.assertEqual(self.index.find_exact_key("user.name", "ko").value, "이름")
		self.assertEqual(self.index.find_exact_key("user.name").value, "Name")
		self.assertEqual(self.index.find_exact_key("user.name", "ja").value, "Name")
		self.assertIsNone(self.index.find_exact_key("missing"))


if __name__ == "__main__":
	unittest.main()
