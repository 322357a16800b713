"""Simple Bayes -- lightweight Naive Bayes text classification."""

__version__ = "0.1.0"

from .bayes import DEFAULT_PROB, Bayes, TieBreak
from .category import Category
from .config import Settings, load_settings
from .document import (
    CallableTokenizer,
    Document,
    TermCounts,
    Tokenizer,
    WordTokenizer,
)
from .errors import (
    InvalidConfigurationError,
    SimpleBayesError,
    UndefinedPriorError,
    UnknownCategoryError,
)

__all__ = [
    # Core
    "Bayes",
    "Category",
    "TieBreak",
    "DEFAULT_PROB",
    # Documents and tokenizers
    "Document",
    "TermCounts",
    "Tokenizer",
    "WordTokenizer",
    "CallableTokenizer",
    # Errors
    "SimpleBayesError",
    "UnknownCategoryError",
    "UndefinedPriorError",
    "InvalidConfigurationError",
    # Configuration
    "Settings",
    "load_settings",
]
