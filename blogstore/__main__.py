import sys

from blogstore.main import main

sys.exit(main())
