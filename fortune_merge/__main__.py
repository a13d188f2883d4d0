import sys

from fortune_merge.main import main

sys.exit(main())
