"""A single class label and its learned term distribution."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .document import Document, TermCounts
from .errors import UndefinedPriorError

if TYPE_CHECKING:
    from .bayes import Bayes


class Category:
    """Term-frequency table for one category.

    The table only changes through ``train`` and ``untrain``. Counts never
    go below zero: untraining removes at most what is recorded, so it is
    not an exact inverse of ``train`` once counts have already been
    reduced by earlier untraining.

    Args:
        name: Category identifier. Fixed for the life of the category.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self.term_frequencies = TermCounts()

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, doc: Document) -> None:
        """Add every term count in ``doc`` to this category."""
        for term, count in doc:
            self.term_frequencies.add(term, count)

    def untrain(self, doc: Document) -> TermCounts:
        """Remove the term counts in ``doc``, clamping each term at zero.

        Terms this category has never seen are ignored.

        Returns:
            The counts actually removed, per term.
        """
        removed = TermCounts()
        for term, count in doc:
            amount = self.term_frequencies.subtract(term, count)
            if amount:
                removed.add(term, amount)
        return removed

    def total(self) -> int:
        """Total training volume (sum of all term counts)."""
        return self.term_frequencies.total()

    # ------------------------------------------------------------------
    # Probabilities
    # ------------------------------------------------------------------

    def likelihood(self, term: str, default_prob: float) -> float:
        """P(term | category), or ``default_prob`` for an unseen term."""
        count = self.term_frequencies.get(term)
        if count > 0:
            return count / self.total()
        return default_prob

    def probability(self, classifier: "Bayes") -> float:
        """Prior: this category's share of all training volume.

        Raises:
            UndefinedPriorError: If no category has any training volume.
        """
        return self.total() / self._corpus_volume(classifier)

    def log_probability(self, classifier: "Bayes") -> float:
        """Natural log of the prior; ``-inf`` for an untrained category."""
        volume = self._corpus_volume(classifier)
        total = self.total()
        if total == 0:
            return -math.inf
        return math.log(total) - math.log(volume)

    def probability_of_document(self, doc: Document, default_prob: float) -> float:
        """P(doc | category) as a plain product. Underflows on long documents."""
        total = self.total()
        prob = 1.0
        for term, count in doc:
            tf = self.term_frequencies.get(term)
            p = tf / total if tf > 0 else default_prob
            prob *= p ** count
        return prob

    def log_probability_of_document(self, doc: Document, default_prob: float) -> float:
        """log P(doc | category), summed term by term in log space."""
        total = self.total()
        log_total = math.log(total) if total > 0 else 0.0
        log_default = math.log(default_prob)

        score = 0.0
        for term, count in doc:
            tf = self.term_frequencies.get(term)
            if tf > 0:
                score += count * (math.log(tf) - log_total)
            else:
                score += count * log_default
        return score

    def _corpus_volume(self, classifier: "Bayes") -> int:
        volume = sum(cat.total() for cat in classifier.categories.values())
        if volume == 0:
            raise UndefinedPriorError()
        return volume

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "term_frequencies": self.term_frequencies.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        cat = cls(data["name"])
        cat.term_frequencies = TermCounts(data.get("term_frequencies", {}))
        return cat

    def __repr__(self) -> str:
        return f"Category(name={self._name!r}, total={self.total()})"
