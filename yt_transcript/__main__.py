"""Package entry point. Enables python -m yt_transcript."""

import argparse
import json
import sys

from yt_transcript.extraction.errors import AllMethodsFailed


def run_api() -> None:
    """Start the FastAPI server."""
    import uvicorn

    from yt_transcript.settings import settings

    print("🌐 Starting transcript API...", file=sys.stderr)
    uvicorn.run(
        "yt_transcript.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


def run_extract(video_id: str, lang: str | None, api_key: str | None, backup: bool) -> int:
    """Extract one transcript and print it as JSON.

    Args:
        video_id: YouTube video ID.
        lang: Preferred language.
        api_key: Optional Data API key.
        backup: Use the backup chain (third-party library only).

    Returns:
        Process exit code.
    """
    from yt_transcript.extraction.chain import build_backup_extractor, build_primary_extractor
    from yt_transcript.extraction.models import AttemptLog

    extractor = build_backup_extractor() if backup else build_primary_extractor()
    log = AttemptLog()

    try:
        result = extractor.extract(video_id, language=lang, api_key=api_key, attempt_log=log)
    except AllMethodsFailed as e:
        print(f"❌ {e}", file=sys.stderr)
        print(json.dumps({"success": False, "error": str(e), "attempts": log.to_list()}, indent=2))
        return 1

    payload = {
        "success": True,
        "videoId": video_id,
        "source": result.source_method,
        "confidence": result.confidence_score,
        "language": result.language,
        "isAutoGenerated": result.is_auto_generated,
        "segments": result.segment_count,
        "videoTitle": result.video_title,
        "availableLanguages": result.available_languages,
        "transcript": result.transcript,
        "attempts": log.to_list(),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    """Main CLI."""
    parser = argparse.ArgumentParser(
        description="YouTube transcript extraction with multi-source fallback",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m yt_transcript api                          # REST API
  python -m yt_transcript extract dQw4w9WgXcQ          # Full chain
  python -m yt_transcript extract dQw4w9WgXcQ --lang fr
  python -m yt_transcript extract dQw4w9WgXcQ --backup # Library only
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # API
    subparsers.add_parser("api", help="Start the REST API")

    # Extract
    extract_parser = subparsers.add_parser("extract", help="Extract one transcript")
    extract_parser.add_argument("video_id", help="YouTube video ID")
    extract_parser.add_argument("--lang", default=None, help="Preferred language (default: en)")
    extract_parser.add_argument("--api-key", default=None, help="YouTube Data API key")
    extract_parser.add_argument("--backup", action="store_true", help="Use the backup chain")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "api":
            run_api()
        elif args.command == "extract":
            sys.exit(run_extract(args.video_id, args.lang, args.api_key, args.backup))

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
