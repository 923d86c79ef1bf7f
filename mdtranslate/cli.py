#!/usr/bin/env python3
"""
Documentation translation CLI.

Usage:
    python -m mdtranslate translate --lang km,zh,ja           # All lessons
    python -m mdtranslate translate-css --lang km             # CSS lessons only
    python -m mdtranslate translate-css --lang ja --file docs/css/basics/01-introduction.md --verbose
    python -m mdtranslate debug --verbose                     # Check setup
    python -m mdtranslate clean --lang km                     # Remove generated files
    python -m mdtranslate check --lang km                     # QA translated files
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .languages import DEFAULT_LANGUAGE, LANGUAGES, parse_language_list
from .models import RunConfiguration
from .utils.config import Config
from .utils.exceptions import ConfigurationError
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

CSS_SECTION = "css"

EXIT_OK = 0
EXIT_FAILED_JOBS = 1
EXIT_CONFIG_ERROR = 2


def build_run_configuration(args: argparse.Namespace, config: Config, section: Optional[str] = None) -> RunConfiguration:
    settings = config.translation
    delay = args.delay if args.delay is not None else settings.request_delay
    if delay < 0:
        raise ConfigurationError("--delay must not be negative", config_key="delay")

    return RunConfiguration(
        target_languages=tuple(parse_language_list(args.lang)),
        root=Path(args.root or settings.root),
        specific_file=Path(args.file) if args.file else None,
        section=section if section is not None else args.section,
        verbose=args.verbose,
        engine=args.engine or settings.engine,
        skip_existing=args.skip_existing,
        request_delay=float(delay),
        batch_size=int(settings.batch_size),
    )


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_translate(args: argparse.Namespace, config: Config, section: Optional[str] = None) -> int:
    from .pipeline import TranslationPipeline
    from .translators import get_translator

    run_config = build_run_configuration(args, config, section)
    translator = get_translator(run_config.engine, config)
    summary = TranslationPipeline(run_config, translator).run()
    return summary.exit_code


def cmd_translate_css(args: argparse.Namespace, config: Config) -> int:
    return cmd_translate(args, config, section=CSS_SECTION)


def cmd_debug(args: argparse.Namespace, config: Config) -> int:
    from .debug import DebugOptions, run_debug

    options = DebugOptions(
        root=Path(args.root or config.translation.root),
        languages=parse_language_list(args.lang),
        engine=args.engine or config.translation.engine,
        section=args.section,
        offline=args.offline,
        verbose=args.verbose,
    )
    return run_debug(options, config)


def cmd_clean(args: argparse.Namespace, config: Config) -> int:
    from .maintenance import clean_translations

    languages = parse_language_list(args.lang)
    removed = clean_translations(args.root or config.translation.root, languages)
    print(f"🗑️  Removed {removed} translated file(s) for {', '.join(languages)}")
    return EXIT_OK


def cmd_check(args: argparse.Namespace, config: Config) -> int:
    from .maintenance import check_translations, format_report

    report = check_translations(args.root or config.translation.root, parse_language_list(args.lang), args.section)
    print(format_report(report))
    return EXIT_OK if report.ok else EXIT_FAILED_JOBS


# =============================================================================
# PARSER
# =============================================================================

def _add_common(parser: argparse.ArgumentParser, default_lang: str = DEFAULT_LANGUAGE) -> None:
    parser.add_argument("--lang", "-l", default=default_lang,
                        help=f"Comma-separated target languages ({', '.join(LANGUAGES)}); default: {default_lang}")
    parser.add_argument("--root", help="Content directory (default: docs)")
    parser.add_argument("--config", help="YAML config file (default: ./mdtranslate.yaml if present)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed information")
    parser.add_argument("--log-file", help="Also write logs to this file")


def _add_translate_options(parser: argparse.ArgumentParser) -> None:
    _add_common(parser)
    parser.add_argument("--file", "-f", help="Translate this file only")
    parser.add_argument("--engine", "-e", help="Translation engine (google, claude, openai, gemini, deepl)")
    parser.add_argument("--skip-existing", action="store_true", help="Keep translations that already exist")
    parser.add_argument("--delay", type=float, help="Seconds to wait after each translated file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdtranslate",
        description="Machine-translate Markdown documentation into per-language folders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Languages:
  km   Khmer
  zh   Chinese (Simplified)
  ja   Japanese

Engines:
  google   Free Google Translate (default, no key)
  claude   Best quality (ANTHROPIC_API_KEY)
  openai   Good balance (OPENAI_API_KEY)
  gemini   Cheapest LLM (GEMINI_API_KEY)
  deepl    No Khmer (DEEPL_API_KEY)
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate_parser = subparsers.add_parser("translate", help="Translate documentation")
    _add_translate_options(translate_parser)
    translate_parser.add_argument("--section", help="Only translate this sub-directory of the root")
    translate_parser.set_defaults(handler=cmd_translate)

    css_parser = subparsers.add_parser("translate-css", help="Translate the CSS lessons only")
    _add_translate_options(css_parser)
    css_parser.set_defaults(handler=cmd_translate_css, section=CSS_SECTION)

    debug_parser = subparsers.add_parser("debug", help="Check the translation environment")
    _add_common(debug_parser, default_lang=",".join(LANGUAGES))
    debug_parser.add_argument("--engine", "-e", help="Engine to check")
    debug_parser.add_argument("--section", default=CSS_SECTION, help="Sub-directory expected to hold lessons")
    debug_parser.add_argument("--offline", action="store_true", help="Skip the live API test")
    debug_parser.set_defaults(handler=cmd_debug)

    clean_parser = subparsers.add_parser("clean", help="Remove generated translations")
    _add_common(clean_parser)
    clean_parser.set_defaults(handler=cmd_clean)

    check_parser = subparsers.add_parser("check", help="QA translated files against their sources")
    _add_common(check_parser)
    check_parser.add_argument("--section", help="Only check this sub-directory of the root")
    check_parser.set_defaults(handler=cmd_check)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "INFO", log_file=args.log_file)

    try:
        config = Config.load(args.config)
        return args.handler(args, config)
    except ConfigurationError as e:
        print(f"❌ Error: {e.message}", file=sys.stderr)
        logger.debug(str(e))
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
