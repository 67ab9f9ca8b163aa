import argparse
import asyncio
import logging
import sys
import time

from dotenv import load_dotenv

from .clients import DirectModelClient, FrameworkModelClient
from .config import Settings
from .errors import BenchmarkError
from .log import LOGGER_NAME, configure_logging
from .prompt import load_prompt
from .records import format_duration
from .runner import run_comparison, run_sequential

logger = logging.getLogger(f"{LOGGER_NAME}.cli")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sdkbench",
        description="Compare Google GenAI and LangChain Google GenAI latency on the same prompt.",
    )
    parser.add_argument("--sequential", action="store_true", help="call the clients one after another and only log results")
    parser.add_argument("--tolerance-ms", type=int, default=None)
    parser.add_argument("--results-dir", default=None)
    return parser.parse_args(argv)


def build_clients(settings: Settings):
    direct = DirectModelClient(
        settings.google_api_key,
        model=settings.model,
        temperature=settings.temperature,
        thinking_budget=settings.thinking_budget,
    )
    framework = FrameworkModelClient(
        settings.google_langchain_api_key,
        model=settings.model,
        temperature=settings.temperature,
        thinking_budget=settings.thinking_budget,
    )
    return direct, framework


async def run(args, prompt, direct, framework, results_dir, tolerance_ms):
    try:
        if args.sequential:
            await run_sequential(prompt, direct, framework)
            return None
        return await run_comparison(prompt, direct, framework, results_dir, tolerance_ms)
    finally:
        await direct.aclose()
        await framework.aclose()


def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)
    settings = Settings()
    configure_logging(logging.DEBUG if settings.debug else logging.INFO, settings.log_file)

    tolerance_ms = args.tolerance_ms if args.tolerance_ms is not None else settings.tolerance_ms
    results_dir = args.results_dir or settings.results_dir

    prompt = load_prompt(
        settings.system_instructions_path,
        settings.user_input_path,
        settings.image_path,
        settings.image_mime_type,
    )
    direct, framework = build_clients(settings)

    try:
        outcome = asyncio.run(
            run(args, prompt, direct, framework, results_dir, tolerance_ms)
        )
    except BenchmarkError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        # let LangChain tracing finish uploading before exit
        time.sleep(settings.trace_flush_seconds)

    if outcome is None:
        return 0
    print(
        f"Time difference: {format_duration(outcome.time_difference_ms)} "
        f"({outcome.time_difference_ms}ms), tolerance {tolerance_ms}ms"
    )
    if not outcome.within_tolerance:
        logger.error("Latency difference exceeds tolerance")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
