# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Allows running the sample with `python -m dlp_triggers`."""

import sys

from dlp_triggers.run import main

if __name__ == "__main__":
    sys.exit(main())
