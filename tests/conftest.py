"""Shared test fixtures for simple-bayes tests."""

from __future__ import annotations

from collections import Counter

import pytest

from simple_bayes import Bayes, CallableTokenizer

ENV_VARS = (
    "SIMPLE_BAYES_MODEL",
    "SIMPLE_BAYES_DEFAULT_PROB",
    "SIMPLE_BAYES_TIE_BREAK",
    "SIMPLE_BAYES_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def split_tokenizer() -> CallableTokenizer:
    """Deterministic tokenizer: lowercase, split on whitespace, no stemming."""
    return CallableTokenizer(lambda text: Counter(text.lower().split()))


@pytest.fixture
def bayes(split_tokenizer: CallableTokenizer) -> Bayes:
    """Untrained classifier with three categories and the split tokenizer."""
    return Bayes("sports", "politics", "tech", tokenizer=split_tokenizer)


@pytest.fixture
def trained(bayes: Bayes) -> Bayes:
    """Classifier trained on a few short snippets per category."""
    bayes.train("sports", "goal match team score goal")
    bayes.train("sports", "team coach match season")
    bayes.train("politics", "vote election senate policy")
    bayes.train("politics", "policy debate vote law")
    bayes.train("tech", "software code release bug")
    bayes.train("tech", "code compiler software chip")
    return bayes
