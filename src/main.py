# src/main.py — v2
"""CLI entry point — seed, match, suggest, stats commands.

Usage:
    donormatch seed [--file profiles.json] [--clear]
    donormatch match --profile-id test-patient-001 [options]
    donormatch match --text "need kidney, blood type O+, age 45" [options]
    donormatch suggest "<free-text description>"
    donormatch stats
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from donormatch.config.settings import ConfigurationError, Settings, load_settings
from donormatch.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    args.settings = settings

    _setup_logging(args.verbose, settings)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="donormatch",
        description=f"donormatch v{__version__} — Hybrid donor/patient profile matching",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- seed ---
    p_seed = subparsers.add_parser(
        "seed", help="Store sample profiles (or a JSON file of profiles)",
    )
    p_seed.add_argument(
        "--file", type=Path, default=None,
        help="JSON list of profiles (default: bundled samples)",
    )
    p_seed.add_argument(
        "--clear", action="store_true",
        help="Clear the store before seeding",
    )
    p_seed.set_defaults(func=_cmd_seed)

    # --- match ---
    p_match = subparsers.add_parser(
        "match", help="Find ranked matches for a profile or free text",
    )
    query = p_match.add_mutually_exclusive_group(required=True)
    query.add_argument("--profile-id", default=None, help="Stored profile id")
    query.add_argument("--text", default=None, help="Free-text query")
    p_match.add_argument(
        "-n", "--top-n", type=int, default=None,
        help="Maximum number of matches (default: MATCHING_TOP_N)",
    )
    p_match.add_argument(
        "--min-similarity", type=float, default=None,
        help="Minimum hybrid score (default: MATCHING_MIN_SIMILARITY)",
    )
    p_match.add_argument(
        "--searcher-type", choices=["patient", "donor"], default=None,
        help="Searcher role (inferred from the query if omitted)",
    )
    p_match.add_argument(
        "--seed", action="store_true",
        help="Seed the bundled sample profiles first (useful with the memory store)",
    )
    p_match.set_defaults(func=_cmd_match)

    # --- suggest ---
    p_suggest = subparsers.add_parser(
        "suggest", help="Draft a structured profile from a description",
    )
    p_suggest.add_argument("text", help="Free-text description (20+ characters)")
    p_suggest.set_defaults(func=_cmd_suggest)

    # --- stats ---
    p_stats = subparsers.add_parser(
        "stats", help="Show profile store statistics",
    )
    p_stats.set_defaults(func=_cmd_stats)

    return parser


async def _cmd_seed(args: argparse.Namespace) -> int:
    """Embed and store a batch of profiles."""
    from donormatch.api.facade import create_matching_service
    from donormatch.profiles.samples import SAMPLE_PROFILES, load_profiles_file

    if args.file is not None and not args.file.exists():
        logger.error("File not found: %s", args.file)
        return 1

    profiles = load_profiles_file(args.file) if args.file else SAMPLE_PROFILES
    service = create_matching_service(args.settings, with_generator=False)
    if args.clear:
        service.clear_all()

    stored = await service.store_profiles_batch(profiles)
    print(f"\nSeeded {stored} profiles")
    return 0


async def _cmd_match(args: argparse.Namespace) -> int:
    """Run a match query and print the ranked results."""
    from donormatch.api.facade import create_matching_service
    from donormatch.core.models import MatchRequest
    from donormatch.profiles.samples import SAMPLE_PROFILES

    settings = args.settings
    service = create_matching_service(settings, with_generator=False)
    if args.seed:
        await service.store_profiles_batch(SAMPLE_PROFILES)

    request = MatchRequest(
        profile_id=args.profile_id,
        profile_text=args.text,
        top_n=args.top_n if args.top_n is not None else settings.matching_top_n,
        min_similarity=(
            args.min_similarity
            if args.min_similarity is not None
            else settings.matching_min_similarity
        ),
        searcher_type=args.searcher_type,
    )
    matches = await service.find_top_matches(request)

    if not matches:
        print("\nNo matches above the threshold")
        return 0

    print(f"\n{len(matches)} match(es):")
    for match in matches:
        b = match.score_breakdown
        print(
            f"  #{match.rank}  {match.profile.name:<20s} ({match.profile_id})  "
            f"score={match.hybrid_score:.3f}"
        )
        print(
            f"       ai={b.ai_similarity:.3f} blood={b.blood_type_score:.2f} "
            f"location={b.location_score:.2f} age={b.age_score:.2f}"
        )
        print(f"       {match.reason}")
    return 0


async def _cmd_suggest(args: argparse.Namespace) -> int:
    """Generate and print a profile suggestion."""
    from donormatch.api.facade import create_matching_service

    service = create_matching_service(args.settings)
    suggestion = await service.suggest_profile(args.text)

    print("\nProfile suggestion:")
    print(f"  Summary:     {suggestion.summary}")
    print(f"  Organ:       {suggestion.organ_type or '-'}")
    print(f"  Blood type:  {suggestion.blood_type or '-'}")
    print(f"  Age:         {suggestion.age if suggestion.age is not None else '-'}")
    print(f"  Location:    {suggestion.location or '-'}")
    print(f"  Story:       {suggestion.personal_story}")
    if suggestion.safety_flags:
        print(f"  Removed:     {len(suggestion.safety_flags)} statement(s)")
    return 0


async def _cmd_stats(args: argparse.Namespace) -> int:
    """Display profile store statistics."""
    from donormatch.api.facade import create_matching_service

    stats = create_matching_service(args.settings, with_generator=False).get_stats()

    print("\nProfile store:")
    print(f"  Profiles:    {stats.profile_count}")
    print(f"  Embeddings:  {stats.embedding_count}")
    print(f"  Dimensions:  {stats.dimensions if stats.dimensions is not None else '-'}")
    return 0


def _setup_logging(verbose: bool, settings: Settings) -> None:
    """Configure logging for CLI usage (stderr plus an optional rotated file)."""
    from donormatch.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
