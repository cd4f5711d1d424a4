#!/usr/bin/env python3

# Prune a GCR repository down to its newest builds.
#
#   scripts/cleanup.py --repository gcr.io/my-project/my-image --keep 5
#
# Needs a logged in gcloud, see "gcloud auth login".

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gcr_cleanup.cli import main  # noqa: E402

if __name__ == "__main__":
    main()

# vim: tabstop=8 expandtab shiftwidth=4 softtabstop=4
