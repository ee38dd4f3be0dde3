import csv
import logging
import re
from typing import Dict, Iterator, Optional, TextIO

from models import Transaction, TransactionType, Metadata, InvalidRecord
from money import Money, ParseError

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[0-9]+")

# Bytes that are not valid UTF-8 come through as lone surrogates (errors="surrogateescape").
_UNDECODABLE = re.compile("[\udc80-\udcff]")


def _parse_id(text: str, column: str) -> int:
    if _ID_PATTERN.fullmatch(text) is None:
        raise InvalidRecord(f"invalid {column} id: {text!r}")
    return int(text)


def parse_csv_row(row: Dict[Optional[str], Optional[str]]) -> Transaction:
    """
    Parse CSV row into Transaction.

    Raises:
        InvalidRecord: undecodable bytes, missing column, unknown type, bad ids,
            or a deposit/withdrawal without amount
        ParseError: malformed amount
    """
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    for column, value in normalized.items():
        if _UNDECODABLE.search(value):
            raise InvalidRecord(f"column {column!r} is not valid UTF-8")

    try:
        transaction_type = TransactionType(normalized["type"].lower())
        client_id = _parse_id(normalized["client"], "client")
        transaction_id = _parse_id(normalized["tx"], "transaction")
    except KeyError as e:
        raise InvalidRecord(f"missing column {e}") from e
    except ValueError as e:
        raise InvalidRecord(str(e)) from e

    amount = None
    if transaction_type.moves_funds:
        amount = Money.parse_optional(normalized.get("amount", ""))

    return Transaction(
        transaction_type=transaction_type,
        meta=Metadata(client_id=client_id, transaction_id=transaction_id),
        amount=amount,
    )


def iter_transactions(stream: TextIO) -> Iterator[Transaction]:
    """Decode CSV rows lazily; rows that fail to decode are logged and skipped."""
    reader = csv.DictReader(stream)
    skipped = 0
    for row in reader:
        try:
            yield parse_csv_row(row)
        except (InvalidRecord, ParseError) as e:
            skipped += 1
            logger.warning(f"Failed to parse row {reader.line_num}: {e}")

    if skipped:
        logger.info(f"Skipped {skipped} malformed rows")


def read_transactions(filepath: str) -> Iterator[Transaction]:
    """Read CSV file and yield transactions in file order."""
    with open(filepath, "r", newline="", encoding="utf-8", errors="surrogateescape") as f:
        yield from iter_transactions(f)
