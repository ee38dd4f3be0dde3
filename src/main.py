import argparse
import logging
import sys

from ledger_engine import LedgerEngine
from report import write_report
from transaction_reader import read_transactions

logger = logging.getLogger(__name__)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toy-ledger", description="A toy payments engine.")
    parser.add_argument("tx_csv_path", help="Path to a csv file with transactions data")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Switch on verbosity (repeat for more)")
    return parser


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)],
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    engine = LedgerEngine()
    try:
        accounts = engine.process_all(read_transactions(args.tx_csv_path))
    except OSError as e:
        logger.error(f"Cannot read {args.tx_csv_path}: {e}")
        return 1

    write_report(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
