"""Export domain service."""

import csv
import io
import json
import logging
from datetime import datetime, UTC
from typing import Any, Optional

from finreport.database.base import Database
from finreport.domain.entities import Filter, TransactionWithDetails

logger = logging.getLogger(__name__)

CSV_HEADER = ["Date", "Type", "Account", "To Account", "Category", "Amount", "Memo"]
BACKUP_VERSION = 1


def transaction_to_record(txn: TransactionWithDetails) -> dict[str, Any]:
    """Convert a transaction into a JSON-ready record."""
    return {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "kind": txn.kind.value,
        "amount": f"{txn.amount:.2f}",
        "account_id": txn.source_account_id,
        "account_name": txn.account_name,
        "to_account_id": txn.destination_account_id,
        "to_account_name": txn.destination_account_name,
        "category_id": txn.category_id,
        "category_name": txn.category_name,
        "memo": txn.memo,
        "attachment_ref": txn.attachment_ref,
    }


class ExportService:
    """Service for exporting transactions and full backups as text."""

    def __init__(self, db: Database):
        """Initialize export service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_transactions_csv(self, filter: Optional[Filter] = None) -> str:
        """Export transactions matching a filter as CSV text."""
        transactions = self.db.get_transactions_filtered(filter or Filter())
        logger.info("Exporting %d transactions as CSV", len(transactions))

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for txn in transactions:
            writer.writerow(
                [
                    txn.date.isoformat(),
                    txn.kind.value,
                    txn.account_name,
                    txn.destination_account_name or "",
                    txn.category_name or "",
                    f"{txn.amount:.2f}",
                    txn.memo or "",
                ]
            )
        return output.getvalue()

    def export_transactions_json(self, filter: Optional[Filter] = None) -> str:
        """Export transactions matching a filter as a JSON array."""
        transactions = self.db.get_transactions_filtered(filter or Filter())
        logger.info("Exporting %d transactions as JSON", len(transactions))
        return json.dumps(
            [transaction_to_record(txn) for txn in transactions], indent=2
        )

    def export_full_backup(self, exported_at: Optional[datetime] = None) -> str:
        """Export every account, category and transaction as one JSON document."""
        if exported_at is None:
            exported_at = datetime.now(UTC)

        accounts = self.db.list_accounts()
        categories = self.db.list_categories()
        transactions = self.db.get_transactions_filtered(Filter())
        logger.info(
            "Backing up %d accounts, %d categories, %d transactions",
            len(accounts),
            len(categories),
            len(transactions),
        )

        backup = {
            "version": BACKUP_VERSION,
            "exported_at": exported_at.isoformat(),
            "accounts": [
                {
                    "id": acc.id,
                    "name": acc.name,
                    "currency": acc.currency,
                    "initial_balance": f"{acc.initial_balance:.2f}",
                }
                for acc in accounts
            ],
            "categories": [
                {
                    "id": cat.id,
                    "name": cat.name,
                    "parent_id": cat.parent_id,
                    "kind": cat.kind.value,
                }
                for cat in categories
            ],
            "transactions": [transaction_to_record(txn) for txn in transactions],
        }
        return json.dumps(backup, indent=2)
