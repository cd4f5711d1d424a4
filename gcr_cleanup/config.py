from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .exceptions import ConfigError

ALLOWED_HOSTS = ("gcr.io", "us.gcr.io", "eu.gcr.io", "asia.gcr.io")
DEFAULT_KEEP = 5


@dataclass(frozen=True)
class Repository:
    host: str
    path: str
    port: int | None = None

    @property
    def origin(self) -> str:
        if self.port is None:
            return "https://%s" % self.host
        return "https://%s:%d" % (self.host, self.port)

    @property
    def name(self) -> str:
        # registry scope wants the path without its leading slash
        return self.path[1:]

    def __str__(self) -> str:
        return self.host + self.path


def parse_repository(value: str | None) -> Repository:
    """Parse "host[:port]/project/image" into a Repository on an allowed GCR host."""
    if not value:
        raise ConfigError("Repository must not be empty.")
    try:
        parts = urlsplit("https://%s" % value)
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise ConfigError("Repository %r is not a valid url: %s" % (value, e)) from e
    if not host:
        raise ConfigError("Repository url hostname not found.")
    if host not in ALLOWED_HOSTS:
        raise ConfigError("Repository host must be one of [%s], got %s." % (", ".join(ALLOWED_HOSTS), host))
    path = parts.path.rstrip("/")
    if not path:
        raise ConfigError("Repository %r has no image path." % value)
    return Repository(host=host, path=path, port=port)


@dataclass(frozen=True)
class RetentionConfig:
    repository: Repository
    keep: int = DEFAULT_KEEP
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.keep <= 0:
            raise ConfigError("Keep must be a positive integer, got %d." % self.keep)
