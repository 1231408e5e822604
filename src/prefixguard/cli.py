"""prefixguardのコマンドラインインターフェース。"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from prefixguard.config import load_config
from prefixguard.models.errors import ConfigurationError, PrefixGuardError
from prefixguard.services.validation import ValidationService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prefixguard",
        description="Validate that sources live under the package prefix derived from groupId/artifactId "
        "and that the manifest exports/imports no prohibited packages.",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--group-id", help="Module groupId")
    parser.add_argument("--artifact-id", help="Module artifactId")
    parser.add_argument("--packaging", help="Packaging type (runs for 'pom' are skipped)")
    parser.add_argument("--source-root", dest="source_roots", action="append", type=Path, help="Source root (repeatable)")
    parser.add_argument(
        "--test-source-root", dest="test_source_roots", action="append", type=Path, help="Test source root (repeatable)"
    )
    parser.add_argument("--include", dest="source_includes", action="append", help="Source file pattern (repeatable)")
    parser.add_argument("--skip-file", dest="skipped_files", action="append", help="Path pattern to skip (repeatable)")
    parser.add_argument(
        "--prohibited-token", dest="prohibited_package_tokens", action="append", help="Prohibited package token"
    )
    parser.add_argument("--skip-part", dest="package_parts_to_skip", action="append", help="Package part to skip")
    parser.add_argument(
        "--fail",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail on misplaced source files (default) or only warn",
    )
    parser.add_argument("--manifest", dest="manifest_path", type=Path, help="Manifest file")
    parser.add_argument("--output-directory", type=Path, help="Compiled output directory containing META-INF")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """コマンドラインから検証を実行し、終了コードを返す。"""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    overrides = {
        key: getattr(args, key)
        for key in (
            "group_id",
            "artifact_id",
            "packaging",
            "source_roots",
            "test_source_roots",
            "source_includes",
            "skipped_files",
            "prohibited_package_tokens",
            "package_parts_to_skip",
            "fail",
            "manifest_path",
            "output_directory",
        )
    }

    try:
        config = load_config(args.config, **overrides)
        service = ValidationService(config)
        report = service.collect()
        if args.json:
            print(report.model_dump_json(indent=2))
        service.enforce(report)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIGURATION_ERROR
    except PrefixGuardError as e:
        logger.error("%s", e)
        return EXIT_VALIDATION_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
