"""Main entry point for the ATS resume scorer."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from src import __version__
from src.config.settings import Settings
from src.extractor.config import ExtractorConfig
from src.scoring.config import ScoringConfig
from src.utils.logging import configure_logging


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    path.write_text(
        json.dumps(payload, indent=2, default=str),
        encoding="utf-8",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ats-scorer",
        description="ATS resume scorer: keyword matching and feedback for job roles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src analyze resume.pdf --role "Python Developer"
  python -m src analyze resume.docx --role HR --keywords roles.yaml --json
  python -m src roles
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Score a resume against a job role",
    )
    analyze_parser.add_argument(
        "resume",
        type=Path,
        help="Path to the resume (PDF, DOCX, TXT, MD or RTF)",
    )
    analyze_parser.add_argument(
        "--role",
        required=True,
        help="Target job role (see the 'roles' command)",
    )
    analyze_parser.add_argument(
        "--keywords",
        type=Path,
        default=None,
        help="YAML/JSON role keyword file (overrides SCORING_KEYWORDS_PATH)",
    )
    analyze_parser.add_argument(
        "--mime-type",
        default=None,
        help="Document MIME type (defaults to the file extension)",
    )
    analyze_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Directory for analysis.json (defaults to a timestamped run dir)",
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON payload instead of a text summary",
    )

    roles_parser = subparsers.add_parser(
        "roles",
        help="List configured job roles",
    )
    roles_parser.add_argument(
        "--keywords",
        type=Path,
        default=None,
        help="YAML/JSON role keyword file (overrides SCORING_KEYWORDS_PATH)",
    )

    return parser


def _load_keyword_store(keywords_path: Path | None, scoring_config: ScoringConfig):
    from src.scoring.keywords import KeywordStore

    if keywords_path is not None:
        return KeywordStore.from_file(keywords_path)
    return KeywordStore.from_config(scoring_config)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
        scoring_config = ScoringConfig()
        extractor_config = ExtractorConfig()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"ATS scorer v{__version__} starting in {parsed.mode} mode")

    try:
        keyword_store = _load_keyword_store(getattr(parsed, "keywords", None), scoring_config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading keywords: {e}", file=sys.stderr)
        return 1

    if parsed.mode == "roles":
        for role in keyword_store.list_roles():
            print(f"{role} ({len(keyword_store.get_keywords(role))} keywords)")
        return 0

    if parsed.mode == "analyze":
        from src.extractor.service import ResumeTextExtractor
        from src.scoring.service import ResumeScoringService

        resume: Path = parsed.resume
        if not resume.is_file():
            print(f"Error: resume file not found: {resume}", file=sys.stderr)
            return 1

        run_dir = _resolve_run_dir(
            settings,
            prefix="analyze",
            out_run_dir=getattr(parsed, "out_run_dir", None),
        )

        scoring_service = ResumeScoringService(
            config=scoring_config, keyword_store=keyword_store
        )
        extractor = ResumeTextExtractor(config=extractor_config)

        try:
            if parsed.mime_type:
                text = extractor.extract_bytes(resume.read_bytes(), parsed.mime_type)
            else:
                text = extractor.extract_file(resume)
        except OSError as e:
            logger.warning(f"Could not read resume {resume}: {e}")
            result = scoring_service.build_fallback_result(parsed.role, reason=str(e))
        else:
            result = scoring_service.analyze(text, parsed.role)

        payload = scoring_service.to_payload(result)
        if parsed.json:
            print(json.dumps(payload, indent=2))
        else:
            print(scoring_service.format_result(result))

        output_path = run_dir / "analysis.json"
        _write_json(
            output_path,
            {
                "resume": str(resume),
                "role": result.role,
                "analyzed_at": result.analyzed_at.isoformat(),
                "keyword_score": result.keyword_score,
                "llm_score": result.llm_score,
                **payload,
            },
        )
        print(f"Wrote: {output_path}", file=sys.stderr if parsed.json else sys.stdout)
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
