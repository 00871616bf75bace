"""Tests for model alias prefix stripping."""

import pytest

from llm_bridge.domain.services.model_names import (
    GITHUB_MODEL_PREFIXES,
    strip_model_prefix,
)


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        ("github-gpt-5", "gpt-5"),
        ("github/gpt-5", "gpt-5"),
        ("gh-claude-sonnet-4.5", "claude-sonnet-4.5"),
        ("gh/gpt-5", "gpt-5"),
        ("ghcp-gpt-5", "gpt-5"),
        ("ghcp/claude-sonnet-4", "claude-sonnet-4"),
        ("claude-3", "claude-3"),
    ],
)
def test_strip_github_model_prefixes(model: str, expected: str):
    assert strip_model_prefix(model, GITHUB_MODEL_PREFIXES) == expected


def test_only_first_matching_prefix_is_stripped():
    assert strip_model_prefix("gh-github-gpt-5", GITHUB_MODEL_PREFIXES) == "github-gpt-5"


def test_matching_is_case_sensitive():
    assert strip_model_prefix("GitHub-gpt-5", GITHUB_MODEL_PREFIXES) == "GitHub-gpt-5"


def test_prefix_order_decides_the_match():
    # "gh" is listed first, so "ghcp-" never gets a chance
    assert strip_model_prefix("ghcp-gpt-5", ["gh", "ghcp-"]) == "cp-gpt-5"
    assert strip_model_prefix("ghcp-gpt-5", ["ghcp-", "gh"]) == "gpt-5"


def test_no_prefixes_returns_model_unchanged():
    assert strip_model_prefix("github-gpt-5", []) == "github-gpt-5"


def test_default_prefix_order():
    assert GITHUB_MODEL_PREFIXES == ("github-", "github/", "gh-", "gh/", "ghcp-", "ghcp/")

