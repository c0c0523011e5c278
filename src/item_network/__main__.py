import sys

from item_network.pipeline import main

sys.exit(main())
