import sys

from perps_report.positions_cli import main

sys.exit(main())
