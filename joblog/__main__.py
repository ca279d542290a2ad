import sys

from joblog.main import main

sys.exit(main())
