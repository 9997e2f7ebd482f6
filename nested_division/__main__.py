import sys

from nested_division.cli import main

sys.exit(main())
