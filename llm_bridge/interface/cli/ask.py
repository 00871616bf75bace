"""CLI entry point: ask the configured LLM a single question."""

import argparse
import dataclasses
import signal
import sys
import threading

from llm_bridge.application.dto.ask_dto import AskRequest
from llm_bridge.application.ports.context import CallContext
from llm_bridge.config.composition import build_ask_use_case, build_telemetry
from llm_bridge.config.settings import AppSettings
from llm_bridge.domain.errors import DomainError
from llm_bridge.infrastructure.observability.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-bridge-ask", description="Send one prompt to the configured LLM."
    )
    parser.add_argument("--question", required=True)
    parser.add_argument("--model", help="Override LLM_MODEL (e.g. github-gpt-5)")
    parser.add_argument("--system", help="Optional system prompt")
    parser.add_argument("--no-usage", action="store_true", help="Do not print token usage")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = AppSettings()
    if args.model:
        settings = dataclasses.replace(settings, llm_model=args.model)
    setup_logging("llm-bridge", settings.log_level)

    # Ctrl+C cancels the sandboxed run instead of orphaning the container
    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda *_: cancel.set())
    try:
        try:
            uc = build_ask_use_case(settings)
        except DomainError as ex:
            print(f"\n[ERROR] {type(ex).__name__}: {ex}")
            return 1
        ctx = CallContext(telemetry=build_telemetry(settings), cancel=cancel)
        result = uc.execute(AskRequest(question=args.question, system_prompt=args.system), ctx)
    finally:
        signal.signal(signal.SIGINT, previous)

    if result.ok and result.value is not None:
        print(result.value.content)
        if not args.no_usage:
            usage = result.value.token_usage
            print("\n" + "=" * 80, file=sys.stderr)
            print(
                f"USAGE: input={usage.input_tokens} output={usage.output_tokens} "
                f"cache_read={usage.cached_token_reads} cache_write={usage.cached_token_writes} "
                f"total={usage.total_tokens}",
                file=sys.stderr,
            )
        return 0

    err = result.error
    print(f"\n[ERROR] {type(err).__name__}: {err}")
    stderr = getattr(err, "stderr", "")
    if stderr:
        print(f"  → sandbox stderr:\n{stderr.rstrip()}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
