#!/usr/bin/env python3
"""Probe configured external content feeds and report what normalizes."""
import argparse
import asyncio
import json
import os
import sys
import time
from typing import Any, Dict, List

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from viafidei_app.content.domains import DOMAINS  # noqa: E402
from viafidei_app.content.feeds import ExternalFeedFetcher  # noqa: E402
from viafidei_app.content.language import SUPPORTED_LANGUAGES  # noqa: E402


def _duration_ms(start: float) -> int:
    return int((time.time() - start) * 1000)


async def probe_feed(fetcher: ExternalFeedFetcher, domain: str, language: str) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "domain": domain,
        "language": language,
        "url": fetcher.feed_url(domain, language),
        "records": 0,
        "sample": [],
        "ms": None,
    }
    if not result["url"]:
        return result

    start = time.time()
    records = await fetcher.fetch(domain, language)
    result["ms"] = _duration_ms(start)
    result["records"] = len(records)
    result["sample"] = [record.slug for record in records[:3]]
    return result


async def probe_all(fetcher: ExternalFeedFetcher, domains: List[str], languages: List[str]) -> List[Dict[str, Any]]:
    tasks = [probe_feed(fetcher, domain, language) for domain in domains for language in languages]
    return list(await asyncio.gather(*tasks))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Probe external prayer/saint/apparition feeds.")
    parser.add_argument("--domains", default=",".join(DOMAINS), help="Comma-separated domains.")
    parser.add_argument(
        "--languages",
        default=",".join(SUPPORTED_LANGUAGES),
        help="Comma-separated language codes."
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    parser.add_argument("--output", default="", help="Optional JSON report path.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    from dotenv import load_dotenv  # pylint: disable=import-outside-toplevel
    load_dotenv()

    domains = [item.strip() for item in args.domains.split(",") if item.strip() in DOMAINS]
    languages = [item.strip().lower() for item in args.languages.split(",") if item.strip()]
    fetcher = ExternalFeedFetcher(timeout=args.timeout)

    results = asyncio.run(probe_all(fetcher, domains, languages))

    configured = [item for item in results if item["url"]]
    for item in configured:
        status = "✅" if item["records"] else "❌"
        print(f"{status} {item['domain']}/{item['language']}: {item['records']} records ({item['ms']} ms)")
    if not configured:
        print("No external feeds configured; the built-in library will be used.")

    if args.output:
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as handle:
            json.dump({
                "generated_at": time.strftime("%Y-%m-%dT%H:%M:%S%z"),
                "feeds": results
            }, handle, indent=2, sort_keys=True)
        print(f"Wrote report to {args.output}")

    return 1 if any(not item["records"] for item in configured) else 0


if __name__ == "__main__":
    raise SystemExit(main())
