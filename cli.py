"""
Locale index command line.

Scans the configured locale folders and answers the same questions an
editor integration asks: what does a key translate to, where is it
defined, which key is used on a given source line.

	locale-index scan
	locale-index lookup "user.greeting.#{kind}"
	locale-index define users.show.title
	locale-index extract '<%= t("users.show.title") %>' --column 8
"""
import argparse
import asyncio
import logging
import sys

from key_extractor import extract_key
from locale_scanner import LocaleScanner
from resolver import KeyResolver
from settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
	"""
	Configure root logging once at startup.
	level: text level (DEBUG/INFO/WARNING/ERROR)
	"""
	log_level = getattr(logging, level.upper(), logging.INFO)
	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(logging.Formatter(
		"%(asctime)s %(levelname).1s %(name)s: %(message)s",
		datefmt="%H:%M:%S"
	))
	root = logging.getLogger()
	root.setLevel(log_level)
	root.handlers.clear()
	root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="locale-index", description="Index and query YAML locale files")
	parser.add_argument("--env-file", help="read settings from this .env file")
	parser.add_argument("--debug", action="store_true", help="verbose diagnostics")
	sub = parser.add_subparsers(dest="command", required=True)

	sub.add_parser("scan", help="scan locale files and print statistics")
	lookup = sub.add_parser("lookup", help="show translations for a key")
	lookup.add_argument("key")
	define = sub.add_parser("define", help="show where a key is defined")
	define.add_argument("key")
	extract = sub.add_parser("extract", help="find the key used on a source line")
	extract.add_argument("line")
	extract.add_argument("--column", type=int, default=0)
	return parser


def print_entries(entries) -> None:
	for entry in entries:
		where = f"{entry.source_file}:{entry.source_line}" if entry.source_line else entry.source_file
		print(f"[{entry.language or '?'}] {entry.key} = {entry.value}  ({where})")


async def run_command(args: argparse.Namespace, settings: Settings) -> int:
	"""Run one subcommand; returns the process exit code."""
	if args.command == "extract":
		key = extract_key(args.line, args.column)
		if key is None:
			print("No translation lookup on this line")
			return 1
		print(key)
		return 0

	scanner = LocaleScanner(settings)
	resolver = KeyResolver(priority_languages=settings.priority_languages)
	scanner.subscribe(resolver.swap)
	index = await scanner.scan()

	if args.command == "scan":
		print(f"{len(index)} keys")
		for lang, count in index.language_statistics().items():
			print(f"  {lang}: {count}")
		return 0

	if resolver.is_empty:
		print("No translations found; check I18N_LOCALES_PATHS")
		return 1

	if args.command == "lookup":
		entries = resolver.resolve_for_display(args.key) or resolver.resolve_alternative(args.key)
		if not entries:
			print(f"No translation for {args.key}")
			return 1
		print_entries(entries)
		return 0

	locations = resolver.find_definitions(args.key)
	if not locations:
		print(f"No definition for {args.key}")
		return 1
	for location in locations:
		print(f"{location.path}:{location.line + 1}")
	return 0


async def main(argv: list[str] | None = None) -> int:
	"""Main entry point"""
	args = build_parser().parse_args(argv)
	settings = Settings.from_env(args.env_file)
	configure_logging("DEBUG" if args.debug or settings.debug_mode else "INFO")
	try:
		return await run_command(args, settings)
	except KeyboardInterrupt:
		logger.info("Interrupted")
		return 130


def run() -> None:
	sys.exit(asyncio.run(main()))


if __name__ == "__main__":
	run()
