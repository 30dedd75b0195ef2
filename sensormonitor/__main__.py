import sys

from sensormonitor.cli import main

sys.exit(main())
