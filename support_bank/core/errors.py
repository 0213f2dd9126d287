# support_bank/core/errors.py


class SupportBankError(Exception):
    """Base class for errors raised by SupportBank."""


class InvalidTransactionError(SupportBankError, ValueError):
    """A data line that could not be turned into a Transaction."""

    def __init__(self, reason, line):
        super().__init__(f"{reason}: {line}")
        self.reason = reason
        self.line = line


class UnknownAccountError(SupportBankError, LookupError):
    def __init__(self, name):
        super().__init__(f"Unknown account: {name}")
        self.name = name


class SourceReadError(SupportBankError):
    def __init__(self, path, cause):
        super().__init__(f"Could not read transactions from {path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigError(SupportBankError):
    pass
