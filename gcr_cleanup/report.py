from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import click

from .deleter import ACCEPTED, DeletionOutcome


@dataclass
class Summary:
    succeeded: list[str] = field(default_factory=list)
    failed: list[DeletionOutcome] = field(default_factory=list)


def summarize(outcomes: Sequence[DeletionOutcome], echo: Callable[[str], None] = click.echo) -> Summary:
    """Split outcomes on status 202 and print the deleted and failed images."""
    summary = Summary(
        succeeded=[o.image for o in outcomes if o.status == ACCEPTED],
        failed=[o for o in outcomes if o.status != ACCEPTED],
    )
    echo("Success Deleted Images: %s" % summary.succeeded)
    if summary.failed:
        echo("Failed Deleted Images: %s" % summary.failed)
    return summary
