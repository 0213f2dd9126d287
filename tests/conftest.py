import pytest

from support_bank.logging_setup import reset_logging

HEADER = "Date,From,To,Narrative,Amount"


@pytest.fixture(autouse=True)
def _reset_package_logging():
    yield
    reset_logging()


@pytest.fixture
def write_source(tmp_path):
    """Write a transactions file with the usual header and return its path."""
    def _write(name, rows, header=HEADER):
        path = tmp_path / name
        lines = ([header] if header is not None else []) + list(rows)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
