"""
tests/conftest.py - shared fixtures

Registry responses are real requests.Response objects with canned bodies,
so status and body handling runs the same code paths as against GCR.
"""

import json
import sys
from pathlib import Path

import pytest
import requests

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gcr_cleanup.config import parse_repository  # noqa: E402
from gcr_cleanup.retention import ManifestRecord  # noqa: E402


def make_response(status, body=None, text=None):
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = (text or "").encode()
    return response


def records(*pairs):
    """records(("a", 300), ("b", 100)) -> [ManifestRecord, ...]"""
    return [ManifestRecord(digest=d, time_uploaded_ms=t) for d, t in pairs]


@pytest.fixture
def repository():
    return parse_repository("gcr.io/my-project/my-image")


class FakeRegistry:
    """Stand-in for RegistryClient: answers deletes from a digest -> status map."""

    def __init__(self, repository, manifests=(), statuses=None, errors=None):
        self.repository = repository
        self.manifests = list(manifests)
        self.statuses = statuses or {}
        self.errors = errors or {}
        self.deleted = []
        self.tokens = []

    def exchange_token(self, identity_token):
        self.tokens.append(identity_token)
        return "registry-token"

    def list_manifests(self, token):
        return list(self.manifests)

    def delete_manifest(self, digest, token):
        assert token == "registry-token"
        self.deleted.append(digest)
        if digest in self.errors:
            raise self.errors[digest]
        status, body = self.statuses.get(digest, (202, None))
        return make_response(status, body)

    def image_ref(self, digest):
        return "%s@%s" % (self.repository, digest)


@pytest.fixture
def fake_registry(repository):
    def factory(**kwargs):
        return FakeRegistry(repository, **kwargs)

    return factory
