"""Custom exceptions for the ranking context."""

from typing import Optional


class InvalidWeightsError(ValueError):
    """
    Exception raised when ranking weights do not form a convex combination.

    Attributes:
        message: Error description
        weights: The offending weights, by factor name
    """

    def __init__(self, message: str, weights: Optional[dict] = None):
        self.message = message
        self.weights = weights

        parts = [message]
        if weights:
            listed = ", ".join(f"{name}={value}" for name, value in weights.items())
            parts.append(f"Weights: {listed}")

        super().__init__("\n".join(parts))
