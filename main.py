import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from dotenv import load_dotenv

from telco_news.config import load_gemini_config, load_buzzsumo_config, load_url_repair_timeouts
from telco_news.errors import NewsAggregatorError
from telco_news.http_client import HTTPClient
from telco_news.pipeline import NewsPipeline
from telco_news.url_repair import UrlRepairer
from news_sources.gemini_search import GeminiNewsSource
from news_sources.buzzsumo import BuzzSumoSource

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Fetch Philippine telco news for a date range.")
    parser.add_argument("start_date", type=_iso_date, help="first day, YYYY-MM-DD")
    parser.add_argument("end_date", type=_iso_date, help="last day, YYYY-MM-DD")
    parser.add_argument("--output", "-o", help="write JSON here instead of stdout")
    parser.add_argument("--no-url-repair", action="store_true", help="skip URL resolution and liveness checks")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser.parse_args(argv)


async def run(args) -> dict:
    http = HTTPClient()
    try:
        primary = GeminiNewsSource(load_gemini_config())
        secondary = BuzzSumoSource(load_buzzsumo_config(), http)
        repairer = None
        if not args.no_url_repair:
            timeouts = load_url_repair_timeouts()
            repairer = UrlRepairer(http, resolve_timeout=timeouts.resolve, validate_timeout=timeouts.validate)

        pipeline = NewsPipeline(primary, secondary, url_repairer=repairer)
        result = await pipeline.fetch_news(args.start_date, args.end_date)
        return result.to_dict()
    finally:
        await http.close()


def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info("Starting Philippine telco news aggregator...")

    try:
        data = asyncio.run(run(args))
    except NewsAggregatorError as e:
        logger.error(f"Failed to fetch news: {e}")
        return 1

    payload = json.dumps(data, ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info(f"Wrote news to {args.output}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
