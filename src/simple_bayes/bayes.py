"""Naive Bayes text classifier.

Scores text against a fixed set of categories:

    P(category | B1, ..., Bn) ∝ P(category) * P(B1 | category) * ... * P(Bn | category)

where each Bi is a term produced by the tokenizer. The prior P(category) is
the category's share of all training volume; P(Bi | category) is the
term's relative frequency within the category, or ``default_prob`` for a
term the category has never seen.

Two scoring paths are available. ``classifications`` multiplies plain
probabilities and underflows to 0.0 on long texts; ``log_classifications``
sums logarithms and is what ``classify`` uses.

Example::

    b = Bayes("interesting", "uninteresting")
    b.train("interesting", "here is some interesting text about Ruby and rails")
    b.train("uninteresting", "here is some text about financial stuff")
    b.classify("i love rails")  # "interesting"
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from .category import Category
from .document import Document, TermCounts, Tokenizer, WordTokenizer
from .errors import InvalidConfigurationError, UnknownCategoryError

logger = logging.getLogger(__name__)

DEFAULT_PROB = 0.05

MODEL_FORMAT_VERSION = "1.0"


class TieBreak(str, Enum):
    """Which category wins when several share the maximum log score."""

    LAST = "last"
    FIRST = "first"

    @classmethod
    def parse(cls, value: "TieBreak | str") -> "TieBreak":
        try:
            return cls(value.lower() if isinstance(value, str) else value)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"tie_break must be one of {[t.value for t in cls]}, got {value!r}"
            ) from exc


class Bayes:
    """Naive Bayes classifier over a fixed set of categories.

    Categories are declared once at construction and kept in declaration
    order; that order is the order of ``classifications`` results and
    decides ties in ``classify``.

    Args:
        *names: Category names. At least one is required.
        tokenizer: Turns text into term counts. Defaults to ``WordTokenizer()``.
        tie_break: ``TieBreak.LAST`` (default) picks the last maximal
            category in declaration order, ``TieBreak.FIRST`` the first.

    Raises:
        InvalidConfigurationError: If no category names are given.
    """

    def __init__(
        self,
        *names: str,
        tokenizer: Optional[Tokenizer] = None,
        tie_break: TieBreak | str = TieBreak.LAST,
    ) -> None:
        if not names:
            raise InvalidConfigurationError("At least one category name is required.")

        self.tokenizer: Tokenizer = tokenizer if tokenizer is not None else WordTokenizer()
        self.tie_break = TieBreak.parse(tie_break)
        self.term_frequencies = TermCounts()
        self._categories: dict[str, Category] = {}
        for name in names:
            key = str(name)
            if key not in self._categories:
                self._categories[key] = Category(key)

    @property
    def categories(self) -> Mapping[str, Category]:
        """Read-only view of categories by name, in declaration order."""
        return MappingProxyType(self._categories)

    @property
    def category_names(self) -> list[str]:
        return list(self._categories)

    def category(self, name: str) -> Category:
        """Return the category called ``name``.

        Raises:
            UnknownCategoryError: If ``name`` was not declared.
        """
        try:
            return self._categories[str(name)]
        except KeyError:
            raise UnknownCategoryError(str(name), self.category_names) from None

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, name: str, text: str) -> None:
        """Learn ``text`` as an example of category ``name``.

        Example::

            b = Bayes("this", "that")
            b.train("this", "This text")
            b.train("that", "That text")
        """
        cat = self.category(name)
        doc = Document(text, self.tokenizer)
        cat.train(doc)
        for term, count in doc:
            self.term_frequencies.add(term, count)
        logger.debug("Trained %r with %d distinct terms", cat.name, len(doc))

    def untrain(self, name: str, text: str) -> None:
        """Forget ``text`` as an example of category ``name``.

        Counts are clamped at zero, and terms the category never learned
        are ignored. The corpus-wide table loses exactly what the category
        lost.
        """
        cat = self.category(name)
        doc = Document(text, self.tokenizer)
        removed = cat.untrain(doc)
        for term, count in removed.items():
            self.term_frequencies.subtract(term, count)
        logger.debug(
            "Untrained %r: removed %d of %d term occurrences",
            cat.name, removed.total(), doc.counts.total(),
        )

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classifications(
        self, text: str, default_prob: float = DEFAULT_PROB
    ) -> list[tuple[float, Category]]:
        """Plain-space ``(prior * likelihood, category)`` for every category.

        Raises:
            UndefinedPriorError: If nothing has been trained yet.
        """
        _check_default_prob(default_prob)
        doc = Document(text, self.tokenizer)
        return [
            (cat.probability(self) * cat.probability_of_document(doc, default_prob), cat)
            for cat in self._categories.values()
        ]

    def log_classifications(
        self, text: str, default_prob: float = DEFAULT_PROB
    ) -> list[tuple[float, Category]]:
        """Log-space ``(log prior + log likelihood, category)`` for every category.

        Raises:
            UndefinedPriorError: If nothing has been trained yet.
        """
        _check_default_prob(default_prob)
        doc = Document(text, self.tokenizer)
        return [
            (cat.log_probability(self) + cat.log_probability_of_document(doc, default_prob), cat)
            for cat in self._categories.values()
        ]

    def classify(self, text: str, default_prob: float = DEFAULT_PROB) -> str:
        """Return the name of the most probable category for ``text``.

        Ties on the maximum log score go to the last tied category in
        declaration order, or the first with ``TieBreak.FIRST``.

        Raises:
            UndefinedPriorError: If nothing has been trained yet.
        """
        best_score, best = -math.inf, None
        for score, cat in self.log_classifications(text, default_prob):
            if self.tie_break is TieBreak.LAST:
                replace = not best_score > score
            else:
                replace = best is None or score > best_score
            if replace:
                best_score, best = score, cat

        logger.debug("Classified as %r (log score %.4f)", best.name, best_score)
        return best.name

    # ------------------------------------------------------------------
    # Corpus statistics
    # ------------------------------------------------------------------

    def count_term(self, term: str) -> int:
        """Corpus-wide count of ``term`` (0 when never seen)."""
        return self.term_frequencies.get(term)

    def count_terms(self) -> int:
        """Total number of term occurrences across the corpus."""
        return self.term_frequencies.total()

    def count_unique_terms(self) -> int:
        """Number of distinct terms ever trained, including ones untrained to 0."""
        return len(self.term_frequencies)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize categories, tables, and settings."""
        data = {
            "version": MODEL_FORMAT_VERSION,
            "tie_break": self.tie_break.value,
            "categories": [cat.to_dict() for cat in self._categories.values()],
            "term_frequencies": self.term_frequencies.to_dict(),
        }
        # None marks a custom tokenizer that must be supplied again on load
        data["tokenizer"] = (
            self.tokenizer.to_dict() if isinstance(self.tokenizer, WordTokenizer) else None
        )
        return data

    @classmethod
    def from_dict(cls, data: dict, tokenizer: Optional[Tokenizer] = None) -> "Bayes":
        """Rebuild a classifier from ``to_dict()`` output.

        Args:
            data: Serialized classifier.
            tokenizer: Overrides the stored tokenizer configuration. Required
                when the model was saved with a custom tokenizer.

        Raises:
            InvalidConfigurationError: If the data is malformed, or a custom
                tokenizer was used and none is given.
        """
        try:
            categories = [Category.from_dict(c) for c in data["categories"]]
            if tokenizer is None and "tokenizer" in data:
                if data["tokenizer"] is None:
                    raise InvalidConfigurationError(
                        "Model was trained with a custom tokenizer. Pass tokenizer= to load it."
                    )
                tokenizer = WordTokenizer.from_dict(data["tokenizer"])
            bayes = cls(
                *(cat.name for cat in categories),
                tokenizer=tokenizer,
                tie_break=data.get("tie_break", TieBreak.LAST.value),
            )
            bayes._categories = {cat.name: cat for cat in categories}
            bayes.term_frequencies = TermCounts(data.get("term_frequencies", {}))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            if isinstance(exc, InvalidConfigurationError):
                raise
            raise InvalidConfigurationError(f"Malformed model data: {exc}") from exc
        return bayes

    def save(self, path: str | Path) -> None:
        """Write the classifier to a JSON file, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("Saved model to %s", path)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[Tokenizer] = None) -> "Bayes":
        """Load a classifier saved with ``save()``."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise InvalidConfigurationError(f"Cannot read model {path}: {exc}") from exc
        return cls.from_dict(data, tokenizer=tokenizer)

    def __repr__(self) -> str:
        return f"Bayes({', '.join(repr(n) for n in self._categories)})"


def _check_default_prob(default_prob: float) -> None:
    if not 0 < default_prob <= 1:
        raise InvalidConfigurationError(f"default_prob must be in (0, 1], got {default_prob}")
