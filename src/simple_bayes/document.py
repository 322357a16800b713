"""Term tables, tokenizers, and the tokenized document.

The classifier never looks at raw text itself. A ``Tokenizer`` turns text
into a mapping of normalized terms to counts, and a ``Document`` wraps that
mapping for one train, untrain, or classify call.

``WordTokenizer`` is the default tokenizer:

- Unicode NFC normalization and typographic quote folding
- Lowercase alphabetic word extraction
- Minimum word length and skip-word filtering
- Porter stemming (via NLTK)
"""

from __future__ import annotations

import re
import unicodedata
from collections import Counter
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from nltk.stem import PorterStemmer


# ---------------------------------------------------------------------------
# Term-count table
# ---------------------------------------------------------------------------

class TermCounts:
    """Mapping of term to non-negative count with a get-or-zero accessor.

    Missing terms read as 0. Keys are never removed: untraining clamps a
    count down to 0 but keeps the term, so ``len()`` counts every term ever
    observed.
    """

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts: dict[str, int] = {}
        if counts:
            for term, count in counts.items():
                self.add(term, count)

    def get(self, term: str) -> int:
        """Return the count for ``term`` (0 when never seen)."""
        return self._counts.get(term, 0)

    def add(self, term: str, count: int) -> None:
        """Increase the count for ``term`` by ``count``."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count} for {term!r}")
        self._counts[term] = self._counts.get(term, 0) + count

    def subtract(self, term: str, count: int) -> int:
        """Decrease ``term`` by at most its current value.

        Terms that were never added are left alone.

        Returns:
            The amount actually removed.
        """
        current = self._counts.get(term)
        if current is None:
            return 0
        removed = min(count, current)
        self._counts[term] = current - removed
        return removed

    def total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def items(self):
        return self._counts.items()

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def __contains__(self, term: object) -> bool:
        return term in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TermCounts):
            return self._counts == other._counts
        if isinstance(other, Mapping):
            return self._counts == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TermCounts({self._counts!r})"


# ---------------------------------------------------------------------------
# Tokenizers
# ---------------------------------------------------------------------------

@runtime_checkable
class Tokenizer(Protocol):
    """Turns raw text into term counts.

    Implementations must be deterministic: the same text always yields the
    same mapping.
    """

    def tokenize(self, text: str) -> Mapping[str, int]:
        ...


class CallableTokenizer:
    """Adapts a plain ``text -> {term: count}`` function to ``Tokenizer``."""

    def __init__(self, func: Callable[[str], Mapping[str, int]]) -> None:
        self._func = func

    def tokenize(self, text: str) -> Mapping[str, int]:
        return self._func(text)


SKIP_WORDS: frozenset[str] = frozenset({
    "a", "again", "all", "along", "also", "an", "and", "any", "are", "as",
    "at", "be", "been", "being", "but", "by", "came", "can", "cant", "come",
    "could", "did", "didn't", "do", "does", "doesn't", "don't", "each", "for",
    "from", "get", "go", "goes", "going", "good", "got", "had", "has", "have",
    "he", "her", "here", "him", "his", "how", "i", "if", "in", "into", "is",
    "isn't", "it", "its", "just", "let", "like", "made", "make", "many",
    "me", "more", "most", "much", "my", "no", "not", "now", "of", "off", "on",
    "only", "or", "our", "out", "over", "said", "same", "see", "she", "should",
    "so", "some", "such", "than", "that", "the", "their", "them", "then",
    "there", "these", "they", "this", "those", "though", "to", "too", "up",
    "very", "was", "way", "we", "well", "were", "what", "when", "where",
    "which", "while", "who", "why", "will", "with", "would", "you", "your",
})

_QUOTE_FOLDS = {
    "\u201c": '"',
    "\u201d": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u2013": "-",
    "\u2014": "-",
    "\xa0": " ",
}


@dataclass
class WordTokenizer:
    """Default word tokenizer with skip-word filtering and stemming.

    Example::

        tokenizer = WordTokenizer()
        tokenizer.tokenize("Rails and more rails")  # {"rail": 2}

    Args:
        min_length: Words shorter than this are dropped.
        skip_words: Drop common English function words.
        stem: Reduce words to their Porter stem.
    """

    min_length: int = 3
    skip_words: bool = True
    stem: bool = True

    _stemmer: PorterStemmer = field(default_factory=PorterStemmer, init=False, repr=False, compare=False)

    # Letters plus inner apostrophes, so "don't" stays one word
    _WORD_RE = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)*")

    def tokenize(self, text: str) -> Mapping[str, int]:
        """Return a ``Counter`` of normalized terms found in ``text``."""
        return Counter(self.terms(text))

    def terms(self, text: str) -> list[str]:
        """Return normalized terms in order of appearance."""
        if not text:
            return []

        text = unicodedata.normalize("NFC", text)
        for char, replacement in _QUOTE_FOLDS.items():
            text = text.replace(char, replacement)

        terms: list[str] = []
        for match in self._WORD_RE.finditer(text.lower()):
            word = match.group()
            if len(word) < self.min_length:
                continue
            if self.skip_words and word in SKIP_WORDS:
                continue
            terms.append(self._stemmer.stem(word) if self.stem else word)
        return terms

    def to_dict(self) -> dict:
        return {
            "min_length": self.min_length,
            "skip_words": self.skip_words,
            "stem": self.stem,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WordTokenizer":
        return cls(
            min_length=data.get("min_length", 3),
            skip_words=data.get("skip_words", True),
            stem=data.get("stem", True),
        )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class Document:
    """Term counts for a single piece of text.

    Built fresh for every call that takes text. Iterating yields each
    ``(term, count)`` pair once.
    """

    def __init__(self, text: str, tokenizer: Tokenizer) -> None:
        self.text = text
        raw = tokenizer.tokenize(text) if text else {}
        self.counts = TermCounts({term: count for term, count in raw.items() if count > 0})

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(list(self.counts.items()))

    def __len__(self) -> int:
        return len(self.counts)

    def __repr__(self) -> str:
        return f"Document({self.counts.to_dict()!r})"
