import sys

from fxgate.cli import main

sys.exit(main())
