import logging
from datetime import date
from decimal import Decimal

import pytest

from support_bank.config import load_config
from support_bank.core.errors import InvalidTransactionError, SourceReadError
from support_bank.loaders import get_loader, load_sources
from support_bank.loaders.csv_loader import CsvLoader, parse_transaction


def test_parse_transaction_valid_line():
    tx = parse_transaction("01/01/2015,Alice,Bob,Lunch,10.00")
    assert tx.date == date(2015, 1, 1)
    assert tx.from_account == "Alice"
    assert tx.to_account == "Bob"
    assert tx.narrative == "Lunch"
    assert tx.amount == Decimal("10.00")
    assert isinstance(tx.amount, Decimal)


def test_parse_transaction_fields_survive_unchanged():
    line = "14/02/2014,Jon A,Sarah T,Pokemon Training,7.8"
    tx = parse_transaction(line)
    rebuilt = ",".join([
        tx.date.strftime("%d/%m/%Y"),
        tx.from_account,
        tx.to_account,
        tx.narrative,
        str(tx.amount),
    ])
    assert rebuilt == line


def test_parse_transaction_accepts_iso_dates():
    assert parse_transaction("2015-03-04,A,B,x,1").date == date(2015, 3, 4)


def test_parse_transaction_accepts_empty_names():
    tx = parse_transaction("01/01/2015,,,,1.50")
    assert (tx.from_account, tx.to_account, tx.narrative) == ("", "", "")


@pytest.mark.parametrize(
    "line, reason",
    [
        ("01/01/2015,Alice,Bob,10.00", "Wrong number of fields"),
        ("01/01/2015,Alice,Bob,Lunch,extra,10.00", "Wrong number of fields"),
        ("", "Wrong number of fields"),
        ("Lunchtime,Alice,Bob,Lunch,10.00", "Invalid date"),
        ("31/02/2015,Alice,Bob,Lunch,10.00", "Invalid date"),
        ("01/01/2015,Alice,Bob,Lunch,ten", "Invalid transaction amount"),
        ("01/01/2015,Alice,Bob,Lunch,NaN", "Invalid transaction amount"),
        ("01/01/2015,Alice,Bob,Lunch,", "Invalid transaction amount"),
    ],
)
def test_parse_transaction_rejections(line, reason):
    with pytest.raises(InvalidTransactionError) as exc:
        parse_transaction(line)
    assert exc.value.reason == reason
    assert exc.value.line == line


def test_field_count_checked_before_date():
    with pytest.raises(InvalidTransactionError) as exc:
        parse_transaction("not a date,Alice")
    assert exc.value.reason == "Wrong number of fields"


def test_negative_amount_accepted_with_warning(caplog):
    caplog.set_level(logging.WARNING, logger="support_bank")
    tx = parse_transaction("01/01/2015,Alice,Bob,Refund,-3.50")
    assert tx.amount == Decimal("-3.50")
    assert "Negative amount" in caplog.text


def test_negative_amount_rejected_when_disallowed():
    with pytest.raises(InvalidTransactionError) as exc:
        parse_transaction("01/01/2015,Alice,Bob,Refund,-3.50", allow_negative_amounts=False)
    assert exc.value.reason == "Negative transaction amount"


def test_loader_skips_header_even_if_it_looks_like_data(write_source):
    path = write_source(
        "tx.csv",
        ["02/01/2015,Bob,Alice,Dinner,5.00"],
        header="01/01/2015,Alice,Bob,Lunch,10.00",
    )
    txs = list(CsvLoader(load_config()).load(str(path)))
    assert [tx.narrative for tx in txs] == ["Dinner"]


def test_loader_handles_header_only_and_empty_files(tmp_path, write_source):
    header_only = write_source("header.csv", [])
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    loader = CsvLoader(load_config())
    assert list(loader.load(str(header_only))) == []
    assert list(loader.load(str(empty))) == []


def test_loader_skips_bad_line_and_continues(write_source, caplog, capsys):
    caplog.set_level(logging.DEBUG, logger="support_bank")
    path = write_source(
        "dodgy.csv",
        [
            "01/01/2015,Alice,Bob,Lunch,10.00",
            "02/01/2015,Alice,Bob,5.00",
            "03/01/2015,Bob,Alice,Dinner,5.00",
        ],
    )
    loader = CsvLoader(load_config())
    txs = list(loader.load(str(path)))

    assert [tx.narrative for tx in txs] == ["Lunch", "Dinner"]
    assert loader.skipped == [(3, "02/01/2015,Alice,Bob,5.00", "Wrong number of fields")]

    err = capsys.readouterr().err
    assert "Skipping invalid transaction: 02/01/2015,Alice,Bob,5.00" in err

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "wrong number of fields" in errors[0].getMessage()
    assert "02/01/2015,Alice,Bob,5.00" in errors[0].getMessage()
    debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
    assert "Parsing transaction: 02/01/2015,Alice,Bob,5.00" in debug


def test_loader_respects_configured_delimiter(write_source):
    cfg = load_config()
    cfg["delimiter"] = ";"
    path = write_source("semi.csv", ["01/01/2015;Alice;Bob;Lunch, with pudding;10.00"])
    txs = list(CsvLoader(cfg).load(str(path)))
    assert txs[0].narrative == "Lunch, with pudding"


def test_loader_handles_windows_line_endings(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"Date,From,To,Narrative,Amount\r\n01/01/2015,Alice,Bob,Lunch,10.00\r\n")
    txs = list(CsvLoader(load_config()).load(str(path)))
    assert txs[0].amount == Decimal("10.00")


def test_missing_file_raises_source_read_error(tmp_path):
    missing = tmp_path / "nope.csv"
    with pytest.raises(SourceReadError) as exc:
        list(CsvLoader(load_config()).load(str(missing)))
    assert exc.value.path == str(missing)


def test_get_loader_falls_back_to_default(tmp_path):
    assert isinstance(get_loader(str(tmp_path / "a.csv"), load_config()), CsvLoader)
    assert isinstance(get_loader(str(tmp_path / "a.txt"), load_config()), CsvLoader)


def test_load_sources_concatenates_in_order(write_source):
    first = write_source("2014.csv", ["05/05/2014,Alice,Bob,A,1"])
    second = write_source(
        "2015.csv",
        ["01/01/2015,Bob,Carol,B,2", "garbage", "02/01/2015,Carol,Alice,C,3"],
    )
    txs = load_sources([str(first), str(second)], load_config())
    assert [tx.narrative for tx in txs] == ["A", "B", "C"]


@pytest.mark.parametrize(
    "amount",
    [
        "1234567890123456789012345678.91",
        "1000000000000000",
        "1E+1000000",
        "0.00001",
        "1E-1000000",
    ],
)
def test_out_of_range_amounts_are_invalid(amount):
    with pytest.raises(InvalidTransactionError) as exc:
        parse_transaction(f"01/01/2015,Alice,Bob,Big,{amount}")
    assert exc.value.reason == "Invalid transaction amount"


def test_amounts_at_the_limits_are_kept_as_written():
    assert parse_transaction("01/01/2015,A,B,x,999999999999999.9999").amount == Decimal(
        "999999999999999.9999"
    )
    assert str(parse_transaction("01/01/2015,A,B,x,12.50000").amount) == "12.50000"


def test_undecodable_bytes_do_not_abort_the_file(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes(
        b"Date,From,To,Narrative,Amount\n"
        b"01/01/2015,Alice,Bob,Caf\xe9,10.00\n"
        b"02/01/2015,Bob,Alice,Dinner,5.00\n"
    )
    loader = CsvLoader(load_config())
    txs = list(loader.load(str(path)))
    assert [tx.amount for tx in txs] == [Decimal("10.00"), Decimal("5.00")]
    assert txs[0].narrative == "Caf�"
    assert loader.skipped == []
