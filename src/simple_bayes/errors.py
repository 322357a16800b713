"""Exception types raised by the classifier."""

from __future__ import annotations


class SimpleBayesError(Exception):
    """Base class for all classifier errors."""


class UnknownCategoryError(SimpleBayesError, KeyError):
    """A category name was used that the classifier was not created with."""

    def __init__(self, name: str, known: list[str] | None = None) -> None:
        self.name = name
        self.known = list(known or [])
        message = f"Unknown category: {name!r}"
        if self.known:
            message += f". Known: {self.known}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class UndefinedPriorError(SimpleBayesError, ZeroDivisionError):
    """Category priors were requested before any training data was seen."""

    def __init__(self, message: str = "No category has been trained. Call train() first.") -> None:
        super().__init__(message)


class InvalidConfigurationError(SimpleBayesError, ValueError):
    """The classifier or its settings were configured with invalid values."""
