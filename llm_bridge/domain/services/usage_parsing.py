# llm_bridge/domain/services/usage_parsing.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

import re

from llm_bridge.domain.models import TokenUsage

# Copilot CLI prints a per-model usage line on stderr, e.g.
#   claude-sonnet-4.5    7.5k input, 52 output, 3.6k cache read, 3.7k cache write (Est. 1 Premium request)
# The cache write clause is optional.
_NUM = r"(\d+(?:\.\d+)?)([kK]?)"
_USAGE_LINE = re.compile(
    _NUM
    + r"\s+input,\s*"
    + _NUM
    + r"\s+output,\s*"
    + _NUM
    + r"\s+cache read(?:,\s*"
    + _NUM
    + r"\s+cache write)?"
)


def parse_token_value(value: str | None, multiplier: str | None = "") -> int:
    """Convert "3.5" + "k" into 3500. Missing or malformed values count as 0."""
    if not value:
        return 0
    try:
        amount = float(value)
    except ValueError:
        return 0
    if (multiplier or "").lower() == "k":
        amount *= 1000
    return int(amount)


def extract_token_usage(diagnostics: str) -> TokenUsage | None:
    """Token counts from the first usage line in `diagnostics`, or None when there is none."""
    match = _USAGE_LINE.search(diagnostics or "")
    if match is None:
        return None

    groups = match.groups()
    return TokenUsage.from_counts(
        input_tokens=parse_token_value(groups[0], groups[1]),
        output_tokens=parse_token_value(groups[2], groups[3]),
        cached_token_reads=parse_token_value(groups[4], groups[5]),
        cached_token_writes=parse_token_value(groups[6], groups[7]),
    )


def parse_token_usage(diagnostics: str) -> TokenUsage:
    """
    Extract token counts from Copilot CLI diagnostic output.

    Returns an all-zero TokenUsage when no usage line is present. Use
    extract_token_usage to tell that case apart from a reported zero.
    """
    usage = extract_token_usage(diagnostics)
    return usage if usage is not None else TokenUsage()
