import sys

from ava_init.cli import main

sys.exit(main())
