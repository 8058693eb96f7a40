import sys

from .passwords import main

sys.exit(main())
