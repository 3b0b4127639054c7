import sys

from text_compression.cli import main

sys.exit(main())
