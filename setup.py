"""
Build script for turbounescape with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    TURBOUNESCAPE_USE_MYPYC=1 pip install .
"""

import os
import sys

from setuptools import setup

# Hot path modules; __main__.py, context.py and errors.py gain nothing from compilation
MYPYC_MODULES = [
    "src/turbounescape/unescape.py",
    "src/turbounescape/buffer.py",
    "src/turbounescape/smallset.py",
    "src/turbounescape/entity_trie.py",
    "src/turbounescape/entities.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print("ERROR: mypyc is not installed. Install with: pip install turbounescape[mypyc]", file=sys.stderr)
        sys.exit(1)

    return mypycify(
        MYPYC_MODULES,
        opt_level=os.environ.get("MYPYC_OPT_LEVEL", "3"),
        multi_file=False,
    )


if __name__ == "__main__":
    use_mypyc = os.environ.get("TURBOUNESCAPE_USE_MYPYC", "0") == "1"
    setup(ext_modules=build_with_mypyc() if use_mypyc else [])
