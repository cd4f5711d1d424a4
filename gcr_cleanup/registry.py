"""Thin wrapper over the three Docker Registry v2 calls GCR needs for
pruning: token exchange, tag listing and manifest deletion.

Token and tag list failures raise ``requests.HTTPError``. Deletes never
raise on status; the caller decides what counts as deleted.

The sequential token and tag list calls share one ``requests.Session``.
Deletes run on worker threads, so each goes through ``requests.delete``
with its own connection instead of the shared session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from .exceptions import CleanupError
from .retention import manifests_from_tag_list

if TYPE_CHECKING:
    from .config import Repository
    from .retention import ManifestRecord

logger = logging.getLogger(__name__)

TAG_LIST_LIMIT = 99


class RegistryClient:
    def __init__(self, repository: Repository, session: requests.Session | None = None):
        self.repository = repository
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        return self.repository.origin + "/v2" + path

    def get_json(self, path: str, token: str, **params: Any) -> Any:
        r = self.session.get(
            self.url(path),
            params=params,
            headers={"Authorization": "Bearer " + token, "Accept": "application/json"},
        )
        r.raise_for_status()
        return r.json()

    def exchange_token(self, identity_token: str) -> str:
        """Trade a Google access token for a push/pull token on this repository."""
        scope = "repository:%s:push,pull" % self.repository.name
        logger.debug("Requesting registry token for scope %s", scope)
        body = self.get_json("/token", identity_token, scope=scope, service=self.repository.host)
        token = body.get("token")
        if not token:
            raise CleanupError("Token response from %s has no token field" % self.repository.host)
        return token

    def list_tags(self, token: str) -> dict[str, Any]:
        return self.get_json("%s/tags/list" % self.repository.path, token, n=TAG_LIST_LIMIT)

    def list_manifests(self, token: str) -> list[ManifestRecord]:
        manifests = manifests_from_tag_list(self.list_tags(token))
        logger.info("Found %d manifests in %s", len(manifests), self.repository)
        return manifests

    def delete_manifest(self, digest: str, token: str) -> requests.Response:
        return requests.delete(
            self.url("%s/manifests/%s" % (self.repository.path, digest)),
            headers={"Authorization": "Bearer " + token},
        )

    def image_ref(self, digest: str) -> str:
        return "%s@%s" % (self.repository, digest)
