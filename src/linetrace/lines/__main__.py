import sys

from linetrace.lines.xplines import main

sys.exit(main())
