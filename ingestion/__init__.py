"""CSV upload: parse, store, then categorize each row."""

from dataclasses import dataclass
from pathlib import Path

from errors import InvalidInputError
from ingestion.csv_upload import ingest
from logger import get_logger

logger = get_logger()


@dataclass
class ImportResult:
    count: int
    categorized: int


def import_csv_file(services, user_id: int, csv_path: Path) -> ImportResult:
    """Import a CSV file of transactions for a user.

    All valid rows are stored as pending first, then categorized one by one.
    A row whose categorization or update fails stays pending and does not
    stop the import.

    Args:
        services: Services container.
        user_id: Owning user.
        csv_path: Path to the uploaded file.

    Returns:
        ImportResult with the number of stored and categorized rows.

    Raises:
        InvalidInputError: If the file is not a .csv, is malformed, or has no
            valid rows.
    """
    csv_path = Path(csv_path)
    if csv_path.suffix.lower() != ".csv":
        raise InvalidInputError("Only CSV files are allowed")

    with open(csv_path, "r", newline="", encoding="utf-8-sig") as f:
        transactions = ingest(f, user_id)

    if not transactions:
        raise InvalidInputError("No valid transactions found in CSV")

    services.transactions.bulk_create(transactions)
    logger.info(f"Stored {len(transactions)} transaction(s) from {csv_path.name}")

    services.categorizer.categorize_transactions(transactions)

    categorized = 0
    for txn in transactions:
        if txn.status != "categorized":
            continue
        try:
            if services.transactions.update(txn, ["category", "confidence", "status"]):
                categorized += 1
        except Exception as e:
            logger.error(f"Failed to save category for transaction {txn.id}: {e}")

    logger.info(f"Categorized {categorized}/{len(transactions)} uploaded transactions")
    return ImportResult(count=len(transactions), categorized=categorized)
