"""
Tests for batch auto-matching and statistics

A statement is matched line by line; HIGH-confidence matches reserve their
ledger entry for the rest of the run.
"""

import logging
from datetime import datetime, timedelta

import pytest

from automatch.models.matching import MatchConfidence, MatchingConfig
from automatch.services.batch_matching import (
    batch_auto_match,
    get_match_statistics,
    select_auto_matches,
)

DAY = datetime(2024, 6, 15)


def _bank(txn_id, amount, **overrides):
    fields = {"id": txn_id, "transactionDate": DAY, "debitAmount": amount, "description": ""}
    fields.update(overrides)
    return fields


def _acc(txn_id, amount, **overrides):
    fields = {"id": txn_id, "amount": amount, "date": DAY}
    fields.update(overrides)
    return fields


class TestBatchAutoMatch:

    def test_reconciled_transactions_skipped(self):
        bank = [_bank("bank-1", 500.0, isReconciled=True, reference="INV-1")]
        accounting = [_acc("acc-1", 500.0, reference="INV-1")]
        result = batch_auto_match(bank, accounting)

        assert result.matched_count == 0
        assert result.all_suggestions() == []
        assert result.multi_matches == []

    def test_high_confidence_reserves_ledger_entry(self):
        bank = [
            _bank("bank-1", 500.0, reference="INV-1"),
            _bank("bank-2", 500.0, reference="INV-1"),
        ]
        accounting = [_acc("acc-1", 500.0, reference="INV-1")]
        result = batch_auto_match(bank, accounting)

        assert [s.bank_transaction_id for s in result.high_confidence] == ["bank-1"]
        assert result.high_confidence[0].accounting_transaction_id == "acc-1"
        assert result.medium_confidence == []
        assert result.low_confidence == []
        assert result.multi_matches == []

    def test_statement_import_records_accepted(self):
        bank = [_bank("bank-1", 500.0, reference="INV-1", statementId="st-1", accountId="acct-9")]
        accounting = [_acc("acc-1", 500.0, reference="INV-1", vendorName="Acme")]
        result = batch_auto_match(bank, accounting)

        assert [s.accounting_transaction_id for s in result.high_confidence] == ["acc-1"]

    def test_later_lines_draw_from_remaining_entries(self):
        bank = [
            _bank("bank-1", 500.0, reference="INV-1"),
            _bank("bank-2", 500.0),
        ]
        accounting = [
            _acc("acc-1", 500.0, reference="INV-1"),
            _acc("acc-2", 500.0),
        ]
        result = batch_auto_match(bank, accounting)

        assert result.high_confidence[0].accounting_transaction_id == "acc-1"
        assert [s.accounting_transaction_id for s in result.medium_confidence] == ["acc-2"]

    def test_medium_confidence_does_not_reserve(self):
        bank = [_bank("bank-1", 1000.0), _bank("bank-2", 1000.0)]
        accounting = [_acc("acc-1", 1000.0)]
        result = batch_auto_match(bank, accounting)

        assert result.high_confidence == []
        assert [s.accounting_transaction_id for s in result.medium_confidence] == ["acc-1", "acc-1"]
        assert all(s.confidence == MatchConfidence.MEDIUM for s in result.medium_confidence)

    def test_low_confidence_bucket(self):
        bank = [_bank("bank-1", 1000.0)]
        accounting = [_acc("acc-1", 1005.0)]
        result = batch_auto_match(bank, accounting)

        assert len(result.low_confidence) == 1
        assert result.low_confidence[0].confidence == MatchConfidence.LOW

    def test_multi_match_fallback(self):
        bank = [_bank("bank-1", 3000.0)]
        accounting = [_acc("inv-1", 1000.0), _acc("inv-2", 2000.0)]
        result = batch_auto_match(bank, accounting)

        assert result.all_suggestions() == []
        assert len(result.multi_matches) == 1
        assert result.multi_matches[0].accounting_transaction_ids == ["inv-1", "inv-2"]

    def test_multi_match_members_not_reserved_by_default(self):
        bank = [_bank("bank-1", 3000.0), _bank("bank-2", 3000.0)]
        accounting = [_acc("inv-1", 1000.0), _acc("inv-2", 2000.0)]
        result = batch_auto_match(bank, accounting)

        assert [m.bank_transaction_id for m in result.multi_matches] == ["bank-1", "bank-2"]

    def test_multi_match_members_reserved_when_configured(self):
        bank = [_bank("bank-1", 3000.0), _bank("bank-2", 3000.0)]
        accounting = [_acc("inv-1", 1000.0), _acc("inv-2", 2000.0)]
        config = MatchingConfig(reserve_multi_match_members=True)
        result = batch_auto_match(bank, accounting, config)

        assert [m.bank_transaction_id for m in result.multi_matches] == ["bank-1"]

    def test_logs_run_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="automatch"):
            batch_auto_match([_bank("bank-1", 1000.0)], [_acc("acc-1", 1000.0)])
        assert "1 bank / 1 ledger transactions -> 0 high, 1 medium, 0 low, 0 multi" in caplog.text


class TestMatchStatistics:

    def test_empty_statement(self):
        stats = get_match_statistics([], [_acc("acc-1", 100.0)])

        assert stats.total_bank_transactions == 0
        assert stats.total_accounting_transactions == 1
        assert stats.matchable_transactions == 0
        assert stats.unmatchable == 0
        assert stats.estimated_match_rate == 0

    def test_counts_and_rate(self):
        bank = [
            _bank("bank-1", 500.0, reference="INV-1"),
            _bank("bank-2", 800.0, isReconciled=True),
            _bank("bank-3", 42.0),
        ]
        accounting = [_acc("acc-1", 500.0, reference="INV-1")]
        stats = get_match_statistics(bank, accounting)

        assert stats.total_bank_transactions == 3
        assert stats.total_accounting_transactions == 1
        assert stats.matchable_transactions == 1
        assert stats.high_confidence_matches == 1
        assert stats.medium_confidence_matches == 0
        assert stats.low_confidence_matches == 0
        assert stats.multi_transaction_matches == 0
        assert stats.unmatchable == 2
        assert stats.estimated_match_rate == pytest.approx(100 / 3)


class TestSelectAutoMatches:

    def setup_method(self):
        bank = [
            _bank("bank-1", 500.0, reference="INV-1"),
            _bank("bank-2", 1000.0),
            _bank("bank-3", 1000.0, transactionDate=DAY + timedelta(days=20)),
        ]
        accounting = [
            _acc("acc-1", 500.0, reference="INV-1"),
            _acc("acc-2", 1000.0),
            _acc("acc-3", 1005.0, date=DAY + timedelta(days=20)),
        ]
        self.result = batch_auto_match(bank, accounting)

    def test_buckets(self):
        assert len(self.result.high_confidence) == 1
        assert len(self.result.medium_confidence) == 1
        assert len(self.result.low_confidence) == 1
        assert [s.confidence for s in self.result.all_suggestions()] == [
            MatchConfidence.HIGH, MatchConfidence.MEDIUM, MatchConfidence.LOW,
        ]

    def test_high_only_by_default(self):
        selected = select_auto_matches(self.result)
        assert [s.bank_transaction_id for s in selected] == ["bank-1"]

    def test_include_medium(self):
        selected = select_auto_matches(self.result, match_medium=True)
        assert [s.bank_transaction_id for s in selected] == ["bank-1", "bank-2"]

    def test_medium_without_high(self):
        selected = select_auto_matches(self.result, match_high=False, match_medium=True)
        assert [s.bank_transaction_id for s in selected] == ["bank-2"]
