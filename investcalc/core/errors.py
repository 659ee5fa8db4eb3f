"""Typed errors raised by the calculator core."""

from __future__ import annotations

from typing import Dict


class CalculatorError(ValueError):
    """Base class for deterministic, input-derived calculator failures."""

    kind = "calculator_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.kind, "message": self.message}


class InvalidRangeError(CalculatorError):
    kind = "invalid_range"


class UnknownIndexError(CalculatorError):
    kind = "unknown_index"

    def __init__(self, index: str):
        super().__init__(f"Unknown market index: {index!r}")
        self.index = index


class MalformedTransactionError(CalculatorError):
    """Raised for a single transaction that fails shape/type validation.

    Only the request layer sees this one: bad entries are dropped there and
    the rest of the batch is still calculated.
    """

    kind = "malformed_transaction"
