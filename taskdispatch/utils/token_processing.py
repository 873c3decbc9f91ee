"""
Standardized text tokenization utilities.

Provides configurable word tokenization with optional normalization steps:
- Lowercasing
- Stopword removal (caller-supplied set)
- Minimum length filtering
- Numeric token filtering

Designed to be domain-agnostic - stopword lists and thresholds are passed in,
not hardcoded.

Usage:
    from taskdispatch.utils.token_processing import Tokenizer

    tokenizer = Tokenizer(custom_stopwords={"this", "that"}, min_token_length=4)
    tokens = tokenizer.tokenize("Update the billing dashboard with this data")
    # ['update', 'billing', 'dashboard', 'with', 'data']
"""

from typing import Iterable, Optional

from nltk.tokenize import RegexpTokenizer

# Splits on runs of non-word characters, matching a `\W+` split
WORD_PATTERN = r"\w+"


class Tokenizer:
    """
    Configurable tokenizer with a small normalization pipeline.

    Pipeline order:
    1. Tokenization (NLTK RegexpTokenizer over word characters)
    2. Lowercase
    3. Stopword removal
    4. Min length filtering
    5. Numeric filtering (optional)

    The tokenizer is callable so it can be handed to anything expecting a
    ``str -> list[str]`` function.
    """

    def __init__(
        self,
        lowercase: bool = True,
        custom_stopwords: Optional[Iterable[str]] = None,
        min_token_length: int = 1,
        drop_numeric: bool = False,
        pattern: str = WORD_PATTERN,
    ):
        """
        Initialize tokenizer.

        Args:
            lowercase: Whether to lowercase tokens
            custom_stopwords: Tokens to drop after lowercasing (empty by default)
            min_token_length: Minimum token length to keep
            drop_numeric: Whether to drop tokens made only of digits
            pattern: Regex describing a single token
        """
        self.lowercase = lowercase
        self.stopwords = frozenset(word.lower() for word in (custom_stopwords or ()))
        self.min_token_length = min_token_length
        self.drop_numeric = drop_numeric
        self.pattern = pattern
        self._splitter = RegexpTokenizer(pattern)

    def tokenize(self, text: str) -> list[str]:
        """
        Tokenize text with the normalization pipeline.

        Returns:
            List of normalized tokens, in text order (duplicates kept)
        """
        if not text:
            return []

        tokens = self._splitter.tokenize(text)

        if self.lowercase:
            tokens = [t.lower() for t in tokens]

        if self.stopwords:
            tokens = [t for t in tokens if t not in self.stopwords]

        if self.min_token_length > 1:
            tokens = [t for t in tokens if len(t) >= self.min_token_length]

        if self.drop_numeric:
            tokens = [t for t in tokens if not t.isdigit()]

        return tokens

    def token_set(self, text: str) -> frozenset[str]:
        """Tokenize and collapse to a set for membership checks."""
        return frozenset(self.tokenize(text))

    def __call__(self, text: str) -> list[str]:
        return self.tokenize(text)

    def get_config_dict(self) -> dict:
        """Return tokenizer settings as a dictionary."""
        return {
            "lowercase": self.lowercase,
            "stopwords": sorted(self.stopwords),
            "min_token_length": self.min_token_length,
            "drop_numeric": self.drop_numeric,
            "pattern": self.pattern,
        }
