"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details
"""

import sys

from ecsig.cli import main


sys.exit(main())
