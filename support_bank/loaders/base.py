# support_bank/loaders/base.py
from abc import ABC, abstractmethod


class BaseLoader(ABC):
    def __init__(self, config):
        self.config = config
        self.skipped = []

    @abstractmethod
    def load(self, file_path):
        """
        Yield Transaction instances from file_path.
        Malformed records are reported and skipped, never raised.
        Raise SourceReadError if the file itself cannot be read.
        """
        pass
