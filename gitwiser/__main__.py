import sys

from gitwiser.cli import main

sys.exit(main())
