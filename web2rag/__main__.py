"""Run web2rag as a module: python -m web2rag."""

import sys

from .cli import main

sys.exit(main())
