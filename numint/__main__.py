import sys

from numint.cli import main

sys.exit(main())
