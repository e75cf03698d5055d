"""Entry point for running telcoindex as a module.

Usage:
    python -m telcoindex
"""

import os

# Must be set before huggingface_hub is imported.
os.environ.setdefault("HF_HUB_DISABLE_PROGRESS_BARS", "1")

from telcoindex.app import main

if __name__ == "__main__":
    raise SystemExit(main())
