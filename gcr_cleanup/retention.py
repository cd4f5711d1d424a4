from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import CleanupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestRecord:
    """One image manifest from the tag list, addressed by its digest."""

    digest: str
    time_uploaded_ms: int
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_tag_list_entry(cls, digest: str, entry: Mapping[str, Any]) -> ManifestRecord:
        # GCR sends timeUploadedMs as a string
        uploaded = entry.get("timeUploadedMs", 0)
        try:
            time_uploaded_ms = int(uploaded)
        except (TypeError, ValueError) as e:
            raise CleanupError("Manifest %s has an invalid timeUploadedMs: %r" % (digest, uploaded)) from e
        rest = {k: v for k, v in entry.items() if k != "timeUploadedMs"}
        return cls(
            digest=digest,
            time_uploaded_ms=time_uploaded_ms,
            extra=MappingProxyType(rest),
        )


def manifests_from_tag_list(tag_list: Mapping[str, Any]) -> list[ManifestRecord]:
    manifest = tag_list.get("manifest") or {}
    return [ManifestRecord.from_tag_list_entry(digest, entry) for digest, entry in manifest.items()]


def plan(manifests: Sequence[ManifestRecord], keep: int) -> list[ManifestRecord]:
    """Return the manifests to delete: everything but the ``keep`` newest.

    The result is ordered newest first. Manifests uploaded at the same
    millisecond keep their input order.
    """
    if len(manifests) <= keep:
        logger.info("There is no images to delete. manifest length: %d", len(manifests))
        return []
    newest_first = sorted(manifests, key=lambda m: m.time_uploaded_ms, reverse=True)
    return newest_first[keep:]
