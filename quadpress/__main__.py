import sys

from quadpress.cli import main

sys.exit(main())
