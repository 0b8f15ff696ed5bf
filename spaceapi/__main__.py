from __future__ import annotations

import argparse
import os
import sys

import uvicorn

from . import __version__
from .config import get_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="spaceapi", description="Serve a SpaceAPI status document.")
    parser.add_argument("--version", action="store_true", help="Show version information")
    args = parser.parse_args(argv)

    if args.version:
        print(f"SpaceAPI Endpoint {__version__}")
        print(f"Commit: {os.environ.get('SPACEAPI_COMMIT', 'unknown')}")
        print(f"Build Date: {os.environ.get('SPACEAPI_BUILD_DATE', 'unknown')}")
        return 0

    settings = get_settings()
    uvicorn.run("spaceapi.app:app", host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
