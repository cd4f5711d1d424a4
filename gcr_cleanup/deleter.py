"""Batched manifest deletion.

Candidates are deleted in consecutive groups of ``BATCH_SIZE``. Every
request in a group is sent at once, and the whole group finishes before the
next group starts, so no more than ``BATCH_SIZE`` deletes are ever in
flight. This is a plain fixed batch rather than a worker pool; candidate
counts are small (the tag list is capped at 99 entries).

A failed delete becomes a :class:`DeleteFailed` outcome and never stops the
rest of the run.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import requests

if TYPE_CHECKING:
    from .registry import RegistryClient
    from .retention import ManifestRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCEPTED = 202
BATCH_SIZE = 3


@dataclass(frozen=True)
class DeletionOutcome:
    image: str
    status: int | None
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == ACCEPTED


@dataclass(frozen=True)
class Deleted(DeletionOutcome):
    status: int | None = field(default=ACCEPTED, init=False)
    reason: str | None = field(default=None, init=False)


@dataclass(frozen=True)
class DeleteFailed(DeletionOutcome):
    """``status`` is None when the request got no response at all."""

    reason: str


def batches(items: Sequence[T], size: int) -> Iterator[list[T]]:
    if size < 1:
        raise ValueError("batch size must be >= 1, got %d" % size)
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def _serialize_body(response: requests.Response) -> str:
    try:
        return json.dumps(response.json(), separators=(",", ":"))
    except ValueError:
        return response.text


def delete_one(client: RegistryClient, record: ManifestRecord, token: str) -> DeletionOutcome:
    image = client.image_ref(record.digest)
    try:
        response = client.delete_manifest(record.digest, token)
    except requests.RequestException as e:
        logger.warning("Delete of %s failed: %s", image, e)
        return DeleteFailed(image=image, status=None, reason="status: None, body: %s" % e)

    if response.status_code == ACCEPTED:
        logger.debug("Deleted %s", image)
        return Deleted(image=image)

    reason = "status: %d, body: %s" % (response.status_code, _serialize_body(response))
    logger.warning("Delete of %s failed: %s", image, reason)
    return DeleteFailed(image=image, status=response.status_code, reason=reason)


def delete_all(
    client: RegistryClient,
    candidates: Sequence[ManifestRecord],
    token: str,
    batch_size: int = BATCH_SIZE,
) -> list[DeletionOutcome]:
    """Delete every candidate, returning one outcome per candidate in input order."""
    outcomes: list[DeletionOutcome] = []
    for number, group in enumerate(batches(candidates, batch_size), 1):
        logger.debug("Deleting batch %d (%d manifests)", number, len(group))
        with ThreadPoolExecutor(max_workers=len(group)) as pool:
            outcomes.extend(pool.map(lambda record: delete_one(client, record, token), group))
    return outcomes
