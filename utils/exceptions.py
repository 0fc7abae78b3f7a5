"""
Custom exceptions for the locale indexer.
"""
class LocaleIndexError(Exception):
	"""Base exception for locale indexing errors"""

class LocaleReadError(LocaleIndexError):
	"""Raised when a locale file cannot be read or decoded."""
	def __init__(self, path: str, reason: str):
		self.path = path
		self.reason = reason
		super().__init__(f"Cannot read locale file {path}: {reason}")

class LocaleParseError(LocaleIndexError):
	"""Raised when the YAML reader rejects a locale file.

	line and column are 1-based when the reader reported a position.
	"""
	def __init__(self, path: str, message: str, line: int | None = None, column: int | None = None):
		self.path = path
		self.line = line
		self.column = column
		where = f" at line {line}, column {column}" if line is not None else ""
		super().__init__(f"Malformed locale file {path}{where}: {message}")

class OversizedKeyError(LocaleIndexError):
	"""Non-fatal error for a flattened key past the length guard."""
	def __init__(self, key: str, limit: int):
		self.key = key
		self.limit = limit
		super().__init__(f"Key too long ({len(key)} > {limit} chars): {key[:50]}...")
