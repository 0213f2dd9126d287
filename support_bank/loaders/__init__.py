# support_bank/loaders/__init__.py
from importlib import import_module
from pathlib import Path

from support_bank.logging_setup import get_logger

logger = get_logger(__name__)


def get_loader(file_path, config):
    """Instantiate the loader registered for the file's suffix, or the default."""
    loaders = config['source_loaders']
    suffix = Path(file_path).suffix.lower().lstrip('.')
    loader_path = loaders.get(suffix) or loaders['default']
    module_name, cls_name = loader_path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(config)


def load_sources(paths, config):
    """
    Load every source in the order given and concatenate the results.
    Each source gets a fresh loader, so nothing carries over between files.
    """
    all_txs = []
    for path in paths:
        loader = get_loader(path, config)
        txs = list(loader.load(path))
        if loader.skipped:
            logger.info("Skipped %d invalid transaction(s) in %s", len(loader.skipped), path)
        all_txs.extend(txs)
    return all_txs
