"""Make the src/ layout importable when the package is not installed."""
import os
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Keep tests independent from the developer's environment.
for _key in [k for k in os.environ if k.startswith("RESTPLATE_")]:
    del os.environ[_key]
