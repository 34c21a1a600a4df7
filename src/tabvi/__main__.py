import sys

from tabvi.cli import main

sys.exit(main())
