import argparse
import asyncio
import json
import sys
from typing import List, Optional

from .client import SummaryApiError, SummaryClient
from .errors import SummaryError
from .schemas import SummaryLength, SummaryOptions, SummaryRequest
from .services.health import health_status
from .services.summarizer import summarize
from .text_utils import calculate_text_stats, format_text_stats, get_reading_time


def _read_text(path: str) -> Optional[str]:
    """Read input text, or print an error and return None."""
    try:
        if path == "-":
            return sys.stdin.read()
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"error: cannot read {path}: {e}", file=sys.stderr)
        return None


def _print_json(data: dict) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def cmd_serve(args: argparse.Namespace) -> int:
    from .main import main as serve

    return serve(host=args.host, port=args.port)


def cmd_summarize(args: argparse.Namespace) -> int:
    text = _read_text(args.file)
    if text is None:
        return 1
    if args.remote:
        request = SummaryRequest(text=text, options=SummaryOptions(length=args.length))

        async def _run():
            async with SummaryClient(base_url=args.base_url) as client:
                return await client.generate_summary_with_retry(request, max_retries=args.retries)

        try:
            result = asyncio.run(_run())
        except SummaryApiError as e:
            print(f"error: {e.message}", file=sys.stderr)
            return 1
    else:
        try:
            result = summarize(text, args.length)
        except SummaryError as e:
            print(f"error: {e.message}", file=sys.stderr)
            return 1
    _print_json(result.model_dump(by_alias=True))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    text = _read_text(args.file)
    if text is None:
        return 1
    stats = calculate_text_stats(text)
    if args.json:
        out = stats.model_dump(by_alias=True)
        out["readingTimeMin"] = get_reading_time(text)
        _print_json(out)
    else:
        print(format_text_stats(stats) or "empty")
    return 0


def cmd_health(args: argparse.Namespace) -> int:
    if not args.remote:
        _print_json(health_status().model_dump())
        return 0

    async def _run():
        async with SummaryClient(base_url=args.base_url) as client:
            return await client.check_health()

    try:
        status = asyncio.run(_run())
    except SummaryApiError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    _print_json(status.model_dump())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="summary-service")
    sub = p.add_subparsers(dest="cmd", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    lengths = [t.value for t in SummaryLength]

    summ = sub.add_parser("summarize", help="Summarize a file (or - for stdin)")
    summ.add_argument("file", nargs="?", default="-")
    summ.add_argument("--length", choices=lengths, default=SummaryLength.medium.value)
    summ.add_argument("--remote", action="store_true", help="Call the API instead of summarizing locally")
    summ.add_argument("--base-url", default=None)
    summ.add_argument("--retries", type=int, default=None)
    summ.set_defaults(func=cmd_summarize)

    stats = sub.add_parser("stats", help="Character, word and paragraph counts")
    stats.add_argument("file", nargs="?", default="-")
    stats.add_argument("--json", action="store_true")
    stats.set_defaults(func=cmd_stats)

    health = sub.add_parser("health", help="Report service health")
    health.add_argument("--remote", action="store_true")
    health.add_argument("--base-url", default=None)
    health.set_defaults(func=cmd_health)

    return p


def app(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    app()
