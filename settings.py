"""Scanner configuration.

Values come from the process environment, optionally seeded from a .env
file (python-dotenv), and are read through a plain key -> value lookup:

	I18N_WORKSPACE_FOLDERS   comma separated project roots (default: cwd)
	I18N_LOCALES_PATHS       comma separated paths relative to each root
	                         (default: config/locales)
	I18N_EXCLUDE_MARKER      configured paths containing it are skipped
	                         (default: tmp)
	I18N_PRIORITY_LANGUAGES  languages listed first in results (default: ko,en,ja)
	I18N_DEBUG               verbose diagnostics (default: false)
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import os

from dotenv import load_dotenv, dotenv_values

from utils import normalize_locale

DEFAULT_LOCALES_PATHS = ("config/locales",)
DEFAULT_EXCLUDE_MARKER = "tmp"
DEFAULT_PRIORITY_LANGUAGES = ("ko", "en", "ja")

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings:
	"""Key -> value settings provider."""

	def __init__(self, values: Mapping[str, str] | None = None):
		self._values: dict[str, str] = dict(values or {})

	@classmethod
	def from_env(cls, env_file: str | os.PathLike | None = None) -> "Settings":
		"""Settings from os.environ after loading a .env file.

		An explicit env_file wins over variables already set in the process;
		the implicit .env lookup never overrides them.
		"""
		if env_file is not None:
			values = dict(os.environ)
			values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
			return cls(values)
		load_dotenv()
		return cls(os.environ)

	def get(self, key: str, default: str | None = None) -> str | None:
		value = self._values.get(key)
		if value is None or not value.strip():
			return default
		return value.strip()

	def get_list(self, key: str, default: tuple[str, ...] = ()) -> list[str]:
		raw = self.get(key)
		if raw is None:
			return list(default)
		return [item.strip() for item in raw.split(",") if item.strip()]

	def get_bool(self, key: str, default: bool = False) -> bool:
		raw = self.get(key)
		if raw is None:
			return default
		return raw.lower() in _TRUE_VALUES

	@property
	def workspace_folders(self) -> list[Path]:
		return [Path(p) for p in self.get_list("I18N_WORKSPACE_FOLDERS", (os.getcwd(),))]

	@property
	def locales_paths(self) -> list[str]:
		return self.get_list("I18N_LOCALES_PATHS", DEFAULT_LOCALES_PATHS)

	@property
	def exclude_marker(self) -> str:
		return self.get("I18N_EXCLUDE_MARKER", DEFAULT_EXCLUDE_MARKER)

	@property
	def priority_languages(self) -> list[str]:
		codes: list[str] = []
		for raw in self.get_list("I18N_PRIORITY_LANGUAGES", DEFAULT_PRIORITY_LANGUAGES):
			code = normalize_locale(raw)
			if code not in codes:
				codes.append(code)
		return codes

	@property
	def debug_mode(self) -> bool:
		return self.get_bool("I18N_DEBUG")


__all__ = ["Settings", "DEFAULT_LOCALES_PATHS", "DEFAULT_PRIORITY_LANGUAGES"]
