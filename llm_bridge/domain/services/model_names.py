# llm_bridge/domain/services/model_names.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Sequence

# Checked in order; only the first match is stripped.
GITHUB_MODEL_PREFIXES: tuple[str, ...] = (
    "github-",
    "github/",
    "gh-",
    "gh/",
    "ghcp-",
    "ghcp/",
)


def strip_model_prefix(model: str, prefixes: Sequence[str]) -> str:
    """
    Remove the first prefix of `prefixes` that `model` starts with.

    Aliases keep model names from colliding across providers that share a
    namespace, e.g. "github-gpt-5" -> "gpt-5". Matching is case-sensitive and
    a doubled alias ("gh-github-gpt-5") loses only one prefix.
    """
    for prefix in prefixes:
        if prefix and model.startswith(prefix):
            return model[len(prefix) :]
    return model

