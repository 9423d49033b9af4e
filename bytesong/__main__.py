import sys

from bytesong.cli import main

sys.exit(main())
