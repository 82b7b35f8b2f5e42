#!/usr/bin/env python3
"""Launch the dispatch API with uvicorn on the port given by $PORT."""

import os
import sys
from pathlib import Path

import uvicorn

SRC_DIR = Path(__file__).resolve().parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def _port() -> int:
    raw = os.environ.get("PORT", "8000")
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: Invalid PORT value '{raw}', using default 8000", file=sys.stderr)
        return 8000


def main() -> None:
    uvicorn.run(
        "dispatch.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_port(),
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
