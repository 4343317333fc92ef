from __future__ import annotations

import os
import sys


PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Keep a developer's .env or shell settings out of the test run
for _name in list(os.environ):
    if _name.startswith("TOTP_API_"):
        del os.environ[_name]
