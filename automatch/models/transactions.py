"""Transaction models for auto-matching."""
from datetime import date, datetime, timezone
from typing import Any, Optional
from pydantic import ConfigDict, Field, field_validator, model_validator
from automatch.models.base import AMBaseModel


def _promote_date(value: Any) -> Any:
    if isinstance(value, datetime) or value is None:
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if len(value) == 10:
            return datetime.combine(date.fromisoformat(value), datetime.min.time())
    return value


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Aware and naive datetimes cannot be subtracted from each other.
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class BankTransaction(AMBaseModel):
    """
    Statement-side record.

    Statement imports carry bookkeeping fields (statement id, account id,
    timestamps) that play no part in matching; those are dropped. Strings
    are kept verbatim because cheque numbers compare exactly.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)

    id: str = Field(..., min_length=1)
    transaction_date: datetime
    debit_amount: Optional[float] = Field(default=None, ge=0)
    credit_amount: Optional[float] = Field(default=None, ge=0)
    description: str = ""
    reference: Optional[str] = None
    cheque_number: Optional[str] = None
    is_reconciled: bool = False

    @field_validator("transaction_date", mode="before")
    @classmethod
    def promote_date(cls, value: Any) -> Any:
        return _promote_date(value)

    @field_validator("transaction_date")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return _to_naive_utc(value)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def check_single_side(self) -> "BankTransaction":
        if self.debit_amount and self.credit_amount:
            raise ValueError("a bank transaction carries either a debit or a credit amount, not both")
        return self

    @property
    def amount(self) -> float:
        """Debit amount when present, otherwise the credit amount."""
        return self.debit_amount or self.credit_amount or 0.0


class AccountingTransaction(AMBaseModel):
    """
    Ledger-side record (invoice, bill, payment).

    Ledgers disagree on the amount field name, so both ``amount`` and
    ``total_amount`` are accepted; ``amount`` wins when both are set.
    Unknown fields are dropped so raw ledger documents can be passed in.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)

    id: str = Field(..., min_length=1)
    amount: Optional[float] = None
    total_amount: Optional[float] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    cheque_number: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def promote_date(cls, value: Any) -> Any:
        return _promote_date(value)

    @field_validator("date")
    @classmethod
    def normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(value)

    @property
    def match_amount(self) -> float:
        if self.amount is not None:
            return self.amount
        if self.total_amount is not None:
            return self.total_amount
        return 0.0
