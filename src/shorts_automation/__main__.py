import sys

from shorts_automation.cli import main

sys.exit(main())
