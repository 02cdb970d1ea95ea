import sys

from gitws.cli import main

sys.exit(main())
