# support_bank/cli.py
import click
from dotenv import load_dotenv

from support_bank.config import load_config
from support_bank.core.errors import ConfigError, SourceReadError
from support_bank.core.ledger import build_accounts
from support_bank.loaders import load_sources
from support_bank.logging_setup import configure_logging, get_logger, resolve_level
from support_bank.repl import CommandLoop, print_banner

logger = get_logger(__name__)


@click.command()
@click.argument(
    'sources',
    nargs=-1,
    type=click.Path(dir_okay=False),
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to config.yaml (defaults are used when omitted)'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    help='Log level (overrides SUPPORTBANK_LOG_LEVEL and the config file)'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(dir_okay=False),
    help='Write the log to this file instead of stderr'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file, e.g. setting SUPPORTBANK_LOG_LEVEL'
)
def main(sources, config_path, log_level, log_file, env_file):
    """
    Load transactions from SOURCES (or the files listed in the config),
    work out who owes whom, then answer "List All" and "List <name>"
    commands until end of input.
    """
    if env_file:
        load_dotenv(env_file)

    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    log_cfg = cfg['logging']
    try:
        level = resolve_level(log_level, log_cfg.get('level'))
    except ValueError as e:
        raise click.ClickException(str(e))
    configure_logging(level, log_file=log_file or log_cfg.get('file'))
    logger.info("SupportBank starting up")

    paths = list(sources) or cfg['sources']
    try:
        transactions = load_sources(paths, cfg)
    except SourceReadError as e:
        logger.critical("%s", e)
        raise click.ClickException(str(e))

    accounts = build_accounts(transactions)
    logger.info(
        "Loaded %d transaction(s) across %d account(s)", len(transactions), len(accounts)
    )

    print_banner()
    CommandLoop(
        accounts,
        symbol=cfg['currency_symbol'],
        date_format=cfg['display_date_format'],
    ).run()
