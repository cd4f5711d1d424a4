from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from .exceptions import CredentialError

logger = logging.getLogger(__name__)

GCLOUD_TOKEN_COMMAND = ("gcloud", "auth", "print-access-token")


def gcloud_token(command: Sequence[str] = GCLOUD_TOKEN_COMMAND) -> str:
    """Return the access token printed by ``gcloud auth print-access-token``.

    Anything written to stderr is a failure, even with a zero exit code.
    """
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(list(command), capture_output=True, text=True)
    except OSError as e:
        raise CredentialError("Could not run %s: %s" % (command[0], e)) from e
    if result.stderr:
        raise CredentialError(result.stderr.strip())
    if result.returncode != 0:
        raise CredentialError("%s exited with status %d" % (" ".join(command), result.returncode))
    return result.stdout.strip()
