"""Helpers to coerce caller-supplied records into transaction models."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError

from automatch.models.transactions import AccountingTransaction, BankTransaction
from automatch.services.errors import InvalidTransactionError

BankInput = Union[BankTransaction, Mapping[str, Any]]
AccountingInput = Union[AccountingTransaction, Mapping[str, Any]]


def to_bank_transaction(record: BankInput, index: int | None = None) -> BankTransaction:
    if isinstance(record, BankTransaction):
        return record
    if record is None:
        raise InvalidTransactionError("bank", "record is None", index)
    try:
        return BankTransaction.model_validate(record)
    except ValidationError as exc:
        raise InvalidTransactionError("bank", str(exc), index) from exc


def to_accounting_transaction(record: AccountingInput, index: int | None = None) -> AccountingTransaction:
    if isinstance(record, AccountingTransaction):
        return record
    if record is None:
        raise InvalidTransactionError("accounting", "record is None", index)
    try:
        return AccountingTransaction.model_validate(record)
    except ValidationError as exc:
        raise InvalidTransactionError("accounting", str(exc), index) from exc


def to_bank_transactions(records: Iterable[BankInput]) -> List[BankTransaction]:
    return [to_bank_transaction(record, idx) for idx, record in enumerate(records)]


def to_accounting_transactions(records: Iterable[AccountingInput]) -> List[AccountingTransaction]:
    return [to_accounting_transaction(record, idx) for idx, record in enumerate(records)]
