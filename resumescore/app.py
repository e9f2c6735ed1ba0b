import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from . import __version__
from .analyzer import KeywordMatchAnalyzer
from .cache import AnalysisCache
from .config import load_settings
from .database import SqlAnalysisCache
from .env import load_env
from .logger import get_logger
from .models import ExternalScores, ExtractedKeywords, ResumeData
from .schema import validate_extracted_keywords, validate_resume, validate_resume_strict
from .scorecard import build_resume_scorecard, build_scorecard
from .scorers.red_flags import detect_red_flags, red_flags_score
from .storage import dump_report, load_json, load_text, save_report

logger = get_logger()


def _require_file(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    return path


def _read_json(value: str) -> Any:
    try:
        return load_json(_require_file(value))
    except ValueError as e:
        raise SystemExit(str(e))


def load_resume(value: str) -> ResumeData:
    data = _read_json(value)
    errors = validate_resume(data)
    if errors:
        print(f"Invalid resume: {value}", file=sys.stderr)
        for e in errors:
            print(f" - {e}", file=sys.stderr)
        raise SystemExit(2)
    return ResumeData.from_dict(data)


def load_keywords(value: str) -> ExtractedKeywords:
    data = _read_json(value)
    errors = validate_extracted_keywords(data)
    if errors:
        print(f"Invalid keywords: {value}", file=sys.stderr)
        for e in errors:
            print(f" - {e}", file=sys.stderr)
        raise SystemExit(2)
    return ExtractedKeywords.from_dict(data)


def emit(report: Any, output: Optional[str]) -> None:
    if output:
        save_report(Path(output), report)
        print(f"Report written to {output}")
        return
    print(dump_report(report))


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if args.strict:
        _, errors = validate_resume_strict(data)
    else:
        errors = validate_resume(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_score(args: argparse.Namespace) -> None:
    settings = args.settings
    original = load_resume(args.resume)
    optimized = load_resume(args.optimized) if args.optimized else original
    job_description = load_text(_require_file(args.jd))

    jd_keywords = None
    requirements = None
    if args.keywords:
        extracted = load_keywords(args.keywords)
        jd_keywords = extracted.terms() or None
        requirements = extracted.requirements or None

    external = None
    if args.external:
        try:
            external = ExternalScores.from_dict(_read_json(args.external))
        except (TypeError, ValueError) as e:
            raise SystemExit(f"Invalid external scores: {e}")

    scorecard = build_resume_scorecard(
        original,
        optimized,
        job_description,
        jd_keywords=jd_keywords,
        requirements=requirements,
        target_title=args.target_title,
        external=external,
        ideal_bullet_length=settings.ideal_bullet_length,
        bullet_sigma=settings.bullet_sigma,
    )
    emit(scorecard.to_dict(), args.output)


def cmd_compare(args: argparse.Namespace) -> None:
    original = load_text(_require_file(args.original))
    optimized = load_text(_require_file(args.optimized))
    job_description = load_text(_require_file(args.jd))
    settings = args.settings
    scorecard = build_scorecard(
        original,
        optimized,
        job_description,
        ideal_sentence_length=settings.ideal_sentence_length,
        sentence_sigma=settings.sentence_sigma,
    )
    emit(scorecard.to_dict(), args.output)


def cmd_red_flags(args: argparse.Namespace) -> None:
    resume = load_resume(args.resume)
    flags = detect_red_flags(resume)
    report = {
        "score": red_flags_score(resume),
        "redFlags": [{"kind": f.kind, "message": f.message} for f in flags],
    }
    emit(report, args.output)


def cmd_keywords(args: argparse.Namespace) -> None:
    settings = args.settings
    resume = load_resume(args.resume)
    job_description = load_text(_require_file(args.jd))
    extracted = load_keywords(args.keywords)

    cache_db = args.cache_db or settings.cache_db
    cache = SqlAnalysisCache(Path(cache_db)) if cache_db else AnalysisCache()
    try:
        analyzer = KeywordMatchAnalyzer(cache=cache)
        report = analyzer.analyze(resume, job_description, extracted, similarity_score=args.similarity)
    finally:
        if isinstance(cache, SqlAnalysisCache):
            cache.close()
    emit(report.to_dict(), args.output)


def main(argv=None):
    # Load .env if present (RESUMESCORE_LOG_LEVEL, RESUMESCORE_CACHE_DB, etc.)
    load_env()
    settings = load_settings()
    logger.set_level(settings.log_level)
    if settings.log_dir:
        logger.add_file_handler(settings.log_dir)

    parser = argparse.ArgumentParser(prog="resumescore", description="Deterministic resume-to-job scoring")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    val = subparsers.add_parser("validate", help="Validate a resume JSON document")
    val.add_argument("--input", required=True, help="Path to resume JSON")
    val.add_argument("--strict", action="store_true", help="Also require parseable dates")
    val.set_defaults(func=cmd_validate)

    sc = subparsers.add_parser("score", help="Weighted scorecard for a structured resume against a job description")
    sc.add_argument("--resume", required=True, help="Path to original resume JSON")
    sc.add_argument("--optimized", help="Path to optimized resume JSON (default: same as --resume)")
    sc.add_argument("--jd", required=True, help="Path to job description text")
    sc.add_argument("--keywords", help="Path to extracted keywords JSON (default: derived from the JD)")
    sc.add_argument("--external", help="Path to JSON with externally computed scores")
    sc.add_argument("--target-title", help="Target job title for seniority alignment")
    sc.add_argument("--output", help="Write report JSON to this path instead of stdout")
    sc.set_defaults(func=cmd_score)

    cmp_ = subparsers.add_parser("compare", help="Compare two plain-text resumes on text metrics")
    cmp_.add_argument("--original", required=True, help="Path to original resume text")
    cmp_.add_argument("--optimized", required=True, help="Path to optimized resume text")
    cmp_.add_argument("--jd", required=True, help="Path to job description text")
    cmp_.add_argument("--output", help="Write report JSON to this path instead of stdout")
    cmp_.set_defaults(func=cmd_compare)

    rf = subparsers.add_parser("red-flags", help="List career red flags in a resume")
    rf.add_argument("--resume", required=True, help="Path to resume JSON")
    rf.add_argument("--output", help="Write report JSON to this path instead of stdout")
    rf.set_defaults(func=cmd_red_flags)

    kw = subparsers.add_parser("keywords", help="Classify extracted job keywords as matched/partial/missing")
    kw.add_argument("--resume", required=True, help="Path to resume JSON")
    kw.add_argument("--jd", required=True, help="Path to job description text")
    kw.add_argument("--keywords", required=True, help="Path to extracted keywords JSON")
    kw.add_argument("--similarity", type=float, help="External cosine similarity in [0, 1]")
    kw.add_argument("--cache-db", help="SQLite cache path (or set RESUMESCORE_CACHE_DB)")
    kw.add_argument("--output", help="Write report JSON to this path instead of stdout")
    kw.set_defaults(func=cmd_keywords)

    args = parser.parse_args(argv)
    args.settings = settings

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
