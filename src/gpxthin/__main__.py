import sys

from gpxthin.cli import main

sys.exit(main())
