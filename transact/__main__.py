"""python -m transact"""

import sys

from transact.cli import main

sys.exit(main())
