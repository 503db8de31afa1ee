import sys

from .pysuite_core import main

sys.exit(main())
