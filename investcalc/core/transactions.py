"""Per-entry validation of user supplied transactions."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from investcalc.core.errors import MalformedTransactionError
from investcalc.schemas.projection import Transaction

logger = logging.getLogger(__name__)


def parse_transaction(raw: Any) -> Transaction:
    """Validate one raw transaction, raising ``MalformedTransactionError`` on bad shape."""
    if isinstance(raw, Transaction):
        return raw
    if not isinstance(raw, dict):
        raise MalformedTransactionError(f"transaction must be an object, got {type(raw).__name__}")
    try:
        return Transaction.model_validate(raw)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise MalformedTransactionError(f"invalid transaction fields: {fields}") from exc


def clean_transactions(raw_transactions: Optional[Iterable[Any]]) -> List[Transaction]:
    """Keep the well-formed transactions, dropping (and logging) the rest."""
    cleaned: List[Transaction] = []
    for position, raw in enumerate(raw_transactions or []):
        try:
            cleaned.append(parse_transaction(raw))
        except MalformedTransactionError as exc:
            logger.warning("Dropping transaction #%d: %s", position, exc.message)
    return cleaned
