# -*- coding: utf-8 -*-
"""Entry point for `python -m frameseq`."""

import sys

from frameseq.app import main

if __name__ == "__main__":
    sys.exit(main())
