"""Vercel entrypoint exposing the ASGI app."""

import sys
from pathlib import Path

# The package lives under src/ and is not installed on the serverless runtime
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gistvox_share.api.app import create_app  # noqa: E402

app = create_app()

__all__ = ["app"]
