from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Sequence

from .config import Settings, load_settings
from .engine import generate_locators, parse_generation_request
from .errors import LocatorRankError
from .locator_recommendation import recommend_improvements
from .logging_setup import build_logger
from .models import FRAMEWORKS, GenerationOptions
from .page_source import fetch_page_content
from .page_summary import summarize_page

Fetcher = Callable[[str], str]


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locatorrank",
        description="Generate and rank element locators for the interactive elements of an HTML page.",
    )
    parser.add_argument("sources", nargs="*", help="HTML files to analyse ('-' reads stdin).")
    parser.add_argument("--url", action="append", default=[], help="Fetch and analyse a rendered page.")
    parser.add_argument("--framework", choices=FRAMEWORKS, default=settings.framework)
    parser.add_argument(
        "--no-accessibility",
        dest="include_accessibility",
        action="store_false",
        default=settings.include_accessibility,
        help="Skip aria-label and role strategies.",
    )
    parser.add_argument("--summary", action="store_true", help="Include page metadata, forms and accessibility inventory.")
    parser.add_argument("--advice", action="store_true", help="Attach improvement advice to each element.")
    parser.add_argument("--indent", type=int, default=2)
    return parser


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def analyse_html(
    html: str,
    options: GenerationOptions,
    *,
    summary: bool = False,
    advice: bool = False,
) -> dict[str, Any]:
    tree = parse_generation_request(html, options)
    results = generate_locators(tree, options)
    locators: list[dict[str, Any]] = []
    for result in results:
        row = result.to_dict()
        if advice:
            row["recommendations"] = recommend_improvements(result)
        locators.append(row)

    payload: dict[str, Any] = {
        "framework": options.framework,
        "locators": locators,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if summary:
        payload["summary"] = summarize_page(tree)
    return payload


def run(argv: Sequence[str] | None = None, fetcher: Fetcher | None = None) -> int:
    settings = load_settings()
    logger = build_logger(settings.log_level, settings.log_file)
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.sources and not args.url:
        parser.print_usage(sys.stderr)
        print("locatorrank: error: provide at least one HTML source or --url", file=sys.stderr)
        return 2

    fetch = fetcher or (lambda url: fetch_page_content(url, settings.browser))
    options = GenerationOptions(framework=args.framework, include_accessibility=args.include_accessibility)
    jobs: list[tuple[str, Callable[[], str]]] = [
        (source, lambda source=source: _read_source(source)) for source in args.sources
    ]
    jobs.extend((url, lambda url=url: fetch(url)) for url in args.url)

    outputs: list[dict[str, Any]] = []
    failed = False
    for label, load in jobs:
        try:
            payload = analyse_html(load(), options, summary=args.summary, advice=args.advice)
            outputs.append({"source": label, "success": True, **payload})
        except (LocatorRankError, OSError) as exc:
            failed = True
            logger.error("Analysis failed for %s: %s", label, exc)
            outputs.append({"source": label, "success": False, "error": str(exc)})

    document: Any = outputs[0] if len(outputs) == 1 else outputs
    json.dump(document, sys.stdout, indent=args.indent, ensure_ascii=False)
    sys.stdout.write("\n")
    return 1 if failed else 0


def main() -> int:
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
