"""Simple HTTP client for manual testing."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import time

import httpx

DEFAULT_URL = "http://127.0.0.1:8000/api/analyze"


async def run_client(url: str, text: str, timeout: float) -> None:
    """Send text to the proxy and print the classification it returns."""

    logger = logging.getLogger("analyze_client")
    start = time.perf_counter()

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(url, json={"text": text})
        logger.info("Sent text payload (%d chars)", len(text))

    elapsed = time.perf_counter() - start
    data = response.json()

    if response.status_code != 200:
        logger.error("Received error %d: %s", response.status_code, data.get("error"))
        raise SystemExit(1)

    logger.info("Received classification in %.2fs", elapsed)
    for label in data[0]:
        print(f"{label['label']:>10}  {label['score']:.4f}")
    logger.debug("Raw payload: %s", json.dumps(data))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Test client for the sentiment proxy.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Endpoint URL (default: %(default)s)")
    parser.add_argument("--text", required=True, help="Text to classify.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Seconds to wait, including upstream cold-start retries.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        asyncio.run(run_client(args.url, args.text, args.timeout))
    except KeyboardInterrupt:  # pragma: no cover - manual usage only
        pass


if __name__ == "__main__":  # pragma: no cover
    main()
