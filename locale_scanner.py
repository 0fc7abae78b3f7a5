"""Locale scanner: builds the translation index from the configured folders.

Every workspace folder is combined with every configured locales path; each
``.yml``/``.yaml`` file found below is read, parsed and flattened (see
locale_parser). Reads run concurrently, results are merged in discovery
order and cleaned up once by locale_index.post_process.

Usage:
	scanner = LocaleScanner(Settings.from_env())
	index = await scanner.scan()
	scanner.find_by_key("user.greeting.#{kind}")

A scan always rebuilds from nothing. The finished index replaces the
previous one in a single assignment, so readers never see a half-built
index; subscribers are told about the new one right after.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional
import asyncio
import logging

from file_source import LocalFileSource
from locale_index import Entry, LocaleIndex, post_process
from locale_parser import parse_locale_text
from settings import Settings
from utils import language_from_filename
from utils.exceptions import LocaleIndexError, LocaleReadError

SAMPLE_SIZE = 5

logger = logging.getLogger(__name__)


class LocaleScanner:
	"""Scans locale files and owns the current index snapshot."""

	def __init__(
		self,
		settings: Settings,
		file_source: LocalFileSource | None = None,
		workspace_folders: list[Path] | None = None,
	):
		"""Create a scanner.

		Args:
			settings: Provider for locales paths and the exclusion marker.
			file_source: Disk access; a LocalFileSource when None.
			workspace_folders: Project roots; settings.workspace_folders when None.
		"""
		self.settings = settings
		self.files = file_source or LocalFileSource()
		self._workspace_folders = workspace_folders
		self.index = LocaleIndex()
		self._subscribers: list[Callable[[LocaleIndex], None]] = []

	@property
	def workspace_folders(self) -> list[Path]:
		if self._workspace_folders is not None:
			return list(self._workspace_folders)
		return self.settings.workspace_folders

	def subscribe(self, callback: Callable[[LocaleIndex], None]) -> None:
		"""Call callback with every index a scan produces."""
		self._subscribers.append(callback)

	async def scan(self) -> LocaleIndex:
		"""Rebuild the index from disk and return it."""
		marker = self.settings.exclude_marker
		paths = [p for p in self.settings.locales_paths if not (marker and marker in p)]
		logger.info("Locale paths: %s", ", ".join(paths))

		folders = self.workspace_folders
		if not folders:
			logger.warning("No workspace folder to scan")

		# the directory walk is blocking disk I/O
		files = await asyncio.to_thread(self._discover, folders, paths)
		results = await asyncio.gather(*(self._load_file(path) for path in files))
		collected: list[Entry] = [entry for file_entries in results for entry in file_entries]

		index = LocaleIndex(post_process(collected))
		self.index = index
		logger.info("Found %d translation keys in %d files", len(index), len(files))
		self._log_scan_results(index)
		for callback in self._subscribers:
			callback(index)
		return index

	def _discover(self, folders: list[Path], paths: list[str]) -> list[Path]:
		files: list[Path] = []
		for folder in folders:
			for rel in paths:
				root = Path(folder) / rel
				logger.debug("Looking for locale files in %s", root)
				if not self.files.exists(root):
					logger.warning("Locale path does not exist: %s", root)
					continue
				files.extend(self.files.iter_locale_files(root))
		return files

	async def _load_file(self, path: Path) -> list[Entry]:
		"""Entries for one file; empty when it cannot be read or parsed."""
		try:
			text = await self.files.read_text(path)
		except LocaleReadError as err:
			logger.error("%s", err)
			return []
		language = language_from_filename(path.name)
		if language:
			logger.debug("Language %s from file name %s", language, path.name)
		try:
			entries = parse_locale_text(text, str(path.resolve()), language)
		except LocaleIndexError as err:
			logger.error("Skipping %s: %s", path, err)
			return []
		logger.debug("%d entries from %s", len(entries), path)
		return entries

	def _log_scan_results(self, index: LocaleIndex) -> None:
		if not index:
			return
		logger.info("First entries:")
		for i, entry in enumerate(index[:SAMPLE_SIZE], start=1):
			logger.info("  %d. %s = %s [%s]", i, entry.key, entry.value, entry.language or "no language")
		logger.info("Entries per language:")
		for lang, count in index.language_statistics().items():
			logger.info("  - %s: %d", lang, count)

	# ---------------- Lookups on the current snapshot ----------------
	def get_entries(self) -> list[Entry]:
		return self.index.get_entries()

	def get_entries_by_language(self, language: str) -> list[Entry]:
		return self.index.get_entries_by_language(language)

	def find_by_key(self, key: str) -> list[Entry]:
		return self.index.find_by_key(key)

	def find_exact_key(self, key: str, preferred_language: Optional[str] = None) -> Optional[Entry]:
		return self.index.find_exact_key(key, preferred_language)


__all__ = ["LocaleScanner"]
