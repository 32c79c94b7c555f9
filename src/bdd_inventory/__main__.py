from __future__ import annotations

import sys

from bdd_inventory.main import main

sys.exit(main())
