from __future__ import annotations

import logging
from collections.abc import Callable

import click

from . import __version__
from .config import ALLOWED_HOSTS, DEFAULT_KEEP, RetentionConfig, parse_repository
from .credentials import gcloud_token
from .deleter import delete_all
from .exceptions import ConfigError
from .registry import RegistryClient
from .report import Summary, summarize
from .retention import plan

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def run(
    config: RetentionConfig,
    token_source: Callable[[], str] | None = None,
    client: RegistryClient | None = None,
    echo: Callable[[str], None] = click.echo,
) -> Summary:
    """Prune ``config.repository`` down to its ``config.keep`` newest manifests.

    Credential, token and tag list failures propagate. Failed deletes are
    reported in the returned summary.
    """
    identity_token = (token_source or gcloud_token)()
    client = client or RegistryClient(config.repository)
    token = client.exchange_token(identity_token)
    candidates = plan(client.list_manifests(token), config.keep)

    if config.dry_run:
        for record in candidates:
            echo("Would delete: %s" % client.image_ref(record.digest))
        return Summary()

    logger.info("Deleting %d manifests from %s", len(candidates), config.repository)
    return summarize(delete_all(client, candidates, token), echo=echo)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="gcr-cleanup")
@click.option(
    "--repository",
    envvar="GCR_CLEANUP_REPOSITORY",
    required=True,
    help="Repository to prune, e.g. gcr.io/my-project/my-image. Host must be one of %s."
    % ", ".join(ALLOWED_HOSTS),
)
@click.option(
    "--keep",
    type=int,
    default=DEFAULT_KEEP,
    show_default=True,
    envvar="GCR_CLEANUP_KEEP",
    help="Number of most recently uploaded images to keep.",
)
@click.option("--dry-run", is_flag=True, envvar="GCR_CLEANUP_DRY_RUN", help="Only print what would be deleted.")
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default="info",
    show_default=True,
    envvar="GCR_CLEANUP_LOG_LEVEL",
)
def main(repository: str, keep: int, dry_run: bool, log_level: str) -> None:
    """Delete all but the newest KEEP images of a GCR repository."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        config = RetentionConfig(parse_repository(repository), keep=keep, dry_run=dry_run)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e
    run(config)
