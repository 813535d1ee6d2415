#!/usr/bin/env python3
"""
TTS Latency Lab - Main entry point for running format sweeps.

Usage:
    python main.py [options]

Environment:
    TTS_API_KEY         - Subscription key exchanged for an access token
    TTS_TOKEN_URI       - Token issuing endpoint (optional)
    TTS_SYNTHESIZE_URI  - Synthesis endpoint (optional)
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from tts_latency_lab.benchmarks.format_sweep import FormatSweepSuite
from tts_latency_lab.exceptions import AuthenticationError
from tts_latency_lab.harness.runner import SweepConfig
from tts_latency_lab.instrumentation.traces import init_tracing, shutdown_tracing
from tts_latency_lab.scenarios.corpus import (
    DEFAULT_SENTENCES,
    WARMUP_TEXT,
    load_sentences,
    parse_sentences,
)
from tts_latency_lab.synthesis.base import DEFAULT_LOCALE, DEFAULT_REQUEST_URI, DEFAULT_VOICE_NAME
from tts_latency_lab.synthesis.formats import OutputFormat
from tts_latency_lab.synthesis.http_client import DEFAULT_TOKEN_URI


async def run_format_sweep(args):
    """Authenticate and run the sweep."""
    if args.sentences:
        sentences = load_sentences(args.sentences, limit=args.limit)
    else:
        sentences = parse_sentences(DEFAULT_SENTENCES, limit=args.limit)

    formats = [OutputFormat.parse(name) for name in args.formats] if args.formats else list(OutputFormat)

    config = SweepConfig(
        locale=args.locale,
        voice_name=args.voice,
        request_uri=args.synthesize_uri,
        warmup_text=None if args.no_warmup else WARMUP_TEXT,
        verbose=not args.quiet,
    )

    tracer = init_tracing() if args.trace else None
    suite = FormatSweepSuite(
        api_key=args.api_key,
        config=config,
        token_uri=args.token_uri,
        timeout_seconds=args.timeout,
        use_color=not args.no_color,
        tracer=tracer,
    )

    try:
        outcome = await suite.run(sentences, formats)
    finally:
        if tracer:
            shutdown_tracing()

    if args.quiet:
        print(suite.reporter.final_report(outcome.report, outcome.mean_duration_ms))
    return outcome


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="TTS Latency Lab - First/last byte latency per audio output format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --sentences en-US_SST1000.txt
    python main.py --formats riff-16khz-16bit-mono-pcm audio-16khz-32kbitrate-mono-mp3 --limit 10
    python main.py --list-formats
        """,
    )

    parser.add_argument(
        "--api-key",
        default=os.environ.get("TTS_API_KEY"),
        help="Subscription key (default: $TTS_API_KEY)",
    )
    parser.add_argument(
        "--sentences",
        type=Path,
        help="Corpus file with one sentence per line (default: built-in sentences)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Only use the first N sentences",
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        metavar="FORMAT",
        help="Output formats to sweep (default: all, in declaration order)",
    )
    parser.add_argument(
        "--locale",
        default=DEFAULT_LOCALE,
        help=f"Voice locale (default: {DEFAULT_LOCALE})",
    )
    parser.add_argument(
        "--voice",
        default=DEFAULT_VOICE_NAME,
        help="Voice name",
    )
    parser.add_argument(
        "--token-uri",
        default=os.environ.get("TTS_TOKEN_URI", DEFAULT_TOKEN_URI),
        help="Token issuing endpoint (default: $TTS_TOKEN_URI)",
    )
    parser.add_argument(
        "--synthesize-uri",
        default=os.environ.get("TTS_SYNTHESIZE_URI", DEFAULT_REQUEST_URI),
        help="Synthesis endpoint (default: $TTS_SYNTHESIZE_URI)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Per-request timeout in seconds (default: 60)",
    )
    parser.add_argument(
        "--no-warmup",
        action="store_true",
        help="Skip the warm-up request before the sweep",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Emit an OpenTelemetry span per synthesis call (requires opentelemetry-sdk)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in console output",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final report",
    )
    parser.add_argument(
        "--list-formats",
        action="store_true",
        help="List available output formats and exit",
    )

    args = parser.parse_args()

    if args.list_formats:
        for fmt in OutputFormat:
            print(fmt.value)
        return

    if not args.api_key:
        parser.error("an API key is required (--api-key or TTS_API_KEY)")

    try:
        asyncio.run(run_format_sweep(args))
    except AuthenticationError as e:
        print("Failed authentication.")
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except (ValueError, OSError) as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
