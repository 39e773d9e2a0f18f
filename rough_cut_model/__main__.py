"""
Main entry point for running the rough cut optimization model.

Usage:
    python -m rough_cut_model
    python -m rough_cut_model configs/reference.json
    python -m rough_cut_model configs/ --stdout

A directory argument runs every *.json config found within it.
"""

import sys
from pathlib import Path

from .cli import main


def _expand_directories(argv):
    """Replace directory arguments with the JSON configs they contain."""
    expanded = []
    for arg in argv:
        path = Path(arg)
        if not arg.startswith('-') and path.is_dir():
            configs = sorted(path.glob('*.json'))
            if not configs:
                print(f"Error: No JSON configs found in {path}", file=sys.stderr)
                sys.exit(1)
            expanded.extend(str(p) for p in configs)
        else:
            expanded.append(arg)
    return expanded


if __name__ == "__main__":
    sys.exit(main(_expand_directories(sys.argv[1:])))
