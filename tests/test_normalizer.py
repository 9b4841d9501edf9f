from __future__ import annotations

import pytest

from compact_slack.text import extract_actions, normalize, summarize
from compact_slack.text.normalizer import strip_prefix, strip_suffix
from compact_slack.text.rules import FILLER_RULES, TOOL_RULES


NOISY_PROMPTS = [
    "I'll use the Read tool to look at config.json.",
    "As an AI assistant,   I will   run the test suite.\n",
    "Let me read the file src/app.py. Let me know if you have any questions.",
    "I'll create a new file utils/helpers.py.",
    "I will search for unused imports. I'll add a lint rule.",
    "Now let me look at the logs. Next, I'll think about caching.",
]


def test_tool_usage_is_compressed() -> None:
    assert normalize("I'll use the Read tool to look at config.json.") == "Using Read: look at config.json"


def test_prefix_and_whitespace_are_stripped() -> None:
    assert normalize("As an AI assistant,   I will   run the test suite.\n") == "Running test suite"


def test_suffix_is_stripped_before_rewrites() -> None:
    prompt = "Let me read the file src/app.py. Let me know if you have any questions."
    assert normalize(prompt) == "Reading src/app.py"


def test_create_rule_drops_articles() -> None:
    assert normalize("I'll create a new file utils/helpers.py.") == "Creating utils/helpers.py"


def test_rewrites_apply_to_every_occurrence() -> None:
    prompt = "Let me read the file a.txt. Let me read the file b.txt."
    assert normalize(prompt) == "Reading a.txt Reading b.txt"


def test_search_and_implement_rules() -> None:
    prompt = "I will search for unused imports. I'll add a lint rule."
    assert normalize(prompt) == "Searching unused imports Implementing a lint rule"


def test_temporal_fillers_are_removed() -> None:
    prompt = "Now let me look at the logs. Next, I'll think about caching."
    assert normalize(prompt) == "look at the logs. think about caching."


def test_only_one_prefix_is_removed() -> None:
    assert strip_prefix("As an AI assistant, I understand that it works") == "I understand that it works"


def test_only_one_suffix_is_removed() -> None:
    text = "Done. Feel free to ask if you need help. Feel free to ask if you need help."
    assert strip_suffix(text) == "Done. Feel free to ask if you need help."


def test_rule_order_matters() -> None:
    prompt = "I'll use the Grep tool to scan."
    assert normalize(prompt) == "Using Grep: scan"
    assert normalize(prompt, rules=FILLER_RULES + TOOL_RULES) == "use the Grep tool to scan."


@pytest.mark.parametrize("prompt", ["", "   \n\t "])
def test_empty_input_is_total(prompt: str) -> None:
    assert normalize(prompt) == ""
    assert extract_actions(prompt) == []
    assert summarize(prompt) == ""


@pytest.mark.parametrize("prompt", NOISY_PROMPTS)
def test_normalize_is_idempotent(prompt: str) -> None:
    once = normalize(prompt)
    assert normalize(once) == once


@pytest.mark.parametrize("prompt", NOISY_PROMPTS)
def test_normalize_and_extract_are_deterministic(prompt: str) -> None:
    assert normalize(prompt) == normalize(prompt)
    assert extract_actions(prompt) == extract_actions(prompt)


def test_extract_actions_by_family_order() -> None:
    prompt = "Create the parser, update the docs, and run pytest."
    assert extract_actions(prompt) == ["the parser", "the docs", "pytest"]


def test_extract_actions_groups_families_before_position() -> None:
    assert extract_actions("Read the config. Then build the image.") == ["the image", "the config"]


def test_extract_actions_keeps_dotted_names() -> None:
    assert extract_actions("Check config.json, then edit main.py.") == ["main.py", "config.json"]


def test_extract_actions_limits_to_five() -> None:
    prompt = "add a, add b, add c, add d, add e, add f"
    assert extract_actions(prompt) == ["a", "b", "c", "d", "e"]


def test_summarize_appends_actions() -> None:
    summary = summarize("I'll use the Read tool to look at config.json.")
    assert summary == "Using Read: look at config.json | Actions: tool to look at config.json"


def test_summarize_without_actions_returns_normalized_text() -> None:
    assert summarize("Thinking about   caching") == "Thinking about caching"


def test_temporal_fillers_ignore_case() -> None:
    assert normalize("FIRST, LET ME look at the logs.") == "look at the logs."


def test_extract_actions_keeps_duplicates() -> None:
    prompt = "Check config.json, then read config.json."
    assert extract_actions(prompt) == ["config.json", "config.json"]


def test_extract_actions_stop_only_at_end_of_text() -> None:
    assert extract_actions("run pytest\nedit main.py") == ["main.py"]
