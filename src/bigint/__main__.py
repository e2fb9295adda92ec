import sys

from bigint.cli import main

sys.exit(main())
