"""File-system access used by the scanner.

Kept behind a tiny class so tests (or an editor host) can hand the scanner
another source of locale files without touching the scan logic.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterator
import asyncio
import logging
import os

from utils.exceptions import LocaleReadError

LOCALE_SUFFIXES = (".yml", ".yaml")

logger = logging.getLogger(__name__)


class LocalFileSource:
	"""Reads locale files from the local disk."""

	def __init__(self, encoding: str = "utf-8", suffixes: tuple[str, ...] = LOCALE_SUFFIXES):
		self.encoding = encoding
		self.suffixes = suffixes

	def exists(self, path: Path) -> bool:
		return Path(path).exists()

	def iter_locale_files(self, root: Path) -> Iterator[Path]:
		"""Yield locale files under root, depth first, in name order.

		Unreadable directories are logged and skipped.
		"""
		try:
			children = sorted(os.scandir(root), key=lambda item: item.name)
		except OSError as err:
			logger.error("Cannot list %s: %s", root, err)
			return
		for child in children:
			path = Path(child.path)
			if child.is_dir():
				yield from self.iter_locale_files(path)
			elif child.name.endswith(self.suffixes):
				yield path

	async def read_text(self, path: Path) -> str:
		"""Read a whole file without blocking the event loop.

		Raises:
			LocaleReadError: If the file is missing, unreadable or not valid text.
		"""
		try:
			return await asyncio.to_thread(Path(path).read_text, encoding=self.encoding)
		except (OSError, UnicodeDecodeError) as err:
			raise LocaleReadError(str(path), str(err)) from err


__all__ = ["LocalFileSource", "LOCALE_SUFFIXES"]
