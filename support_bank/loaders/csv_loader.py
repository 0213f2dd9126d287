# support_bank/loaders/csv_loader.py

import csv
from datetime import datetime
from decimal import Decimal, Inexact, InvalidOperation, localcontext

import click

from support_bank.core.errors import InvalidTransactionError, SourceReadError
from support_bank.core.models import Transaction
from support_bank.loaders.base import BaseLoader
from support_bank.logging_setup import get_logger

logger = get_logger(__name__)

FIELD_COUNT = 5
DEFAULT_DATE_FORMATS = ('%d/%m/%Y', '%Y-%m-%d')
# Amounts stay well inside the 28-digit default context, so sums are exact
MAX_INTEGER_DIGITS = 15
SMALLEST_UNIT = Decimal('0.0001')


def _split(line, delimiter):
    # No quoting: a delimiter inside a field always starts a new field.
    return next(csv.reader([line], delimiter=delimiter, quoting=csv.QUOTE_NONE))


def _parse_date(raw, date_formats):
    value = raw.strip()
    for fmt in date_formats:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def _parse_amount(raw):
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        return None
    # Decimal accepts NaN and Infinity, which are not amounts of money
    if not amount.is_finite() or amount.adjusted() >= MAX_INTEGER_DIGITS:
        return None
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            amount.quantize(SMALLEST_UNIT)
        except Inexact:
            return None
    return amount


def parse_transaction(line, delimiter=',', date_formats=DEFAULT_DATE_FORMATS,
                      allow_negative_amounts=True):
    """
    Turn one data line into a Transaction.

    Fields: Date, From, To, Narrative, Amount. The payer, payee and
    narrative are taken as-is (empty values included); the date must match
    one of date_formats and the amount must be a decimal number below
    10**15 with at most four decimal places.
    Raises InvalidTransactionError naming the first check that failed.
    """
    try:
        fields = _split(line, delimiter) if line else ['']
    except csv.Error:
        fields = []
    if len(fields) != FIELD_COUNT:
        raise InvalidTransactionError("Wrong number of fields", line)

    d = _parse_date(fields[0], date_formats)
    if d is None:
        raise InvalidTransactionError("Invalid date", line)

    amount = _parse_amount(fields[4])
    if amount is None:
        raise InvalidTransactionError("Invalid transaction amount", line)
    if amount < 0:
        if not allow_negative_amounts:
            raise InvalidTransactionError("Negative transaction amount", line)
        logger.warning("Negative amount reverses the direction of payment: %s", line)

    return Transaction(
        date=d,
        from_account=fields[1],
        to_account=fields[2],
        narrative=fields[3],
        amount=amount,
    )


class CsvLoader(BaseLoader):
    """
    Loader for delimited transaction files.

    The first line is a header and is ignored whatever it contains.
    Each following line must hold:
      0: Date        (one of the configured date_formats)
      1: From        (payer account name)
      2: To          (payee account name)
      3: Narrative
      4: Amount      (decimal, e.g. 12.50, up to four decimal places)

    Lines that fail validation are logged, echoed to stderr and skipped;
    loading carries on with the next line.
    """
    def load(self, file_path):
        logger.info("Loading transactions from file %s", file_path)
        delimiter = self.config.get('delimiter', ',')
        date_formats = self.config.get('date_formats') or DEFAULT_DATE_FORMATS
        allow_negative = self.config.get('allow_negative_amounts', True)

        try:
            with open(file_path, newline='', encoding='utf-8-sig', errors='replace') as f:
                lines = [raw.rstrip('\r\n') for raw in f]
        except OSError as e:
            raise SourceReadError(file_path, e) from e

        for line_no, line in enumerate(lines[1:], start=2):
            logger.debug("Parsing transaction: %s", line)
            try:
                yield parse_transaction(line, delimiter, date_formats, allow_negative)
            except InvalidTransactionError as e:
                self._report_skipped(line_no, e)

    def _report_skipped(self, line_no, error):
        self.skipped.append((line_no, error.line, error.reason))
        logger.error(
            "Unable to process transaction because %s: %s", error.reason.lower(), error.line
        )
        click.echo(f"Skipping invalid transaction: {error.line}", err=True)
