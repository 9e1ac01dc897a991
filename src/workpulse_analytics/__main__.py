import sys

from workpulse_analytics.cli import main

sys.exit(main())
