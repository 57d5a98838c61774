import sys

from quickgrid.app import main

sys.exit(main())
