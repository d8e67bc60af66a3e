# config/tools/validate_grid.py

import sys           # for exit codes
from pprint import pprint  # for structured printing

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../config/tools/validate_grid.py
# parents[2] is the project root; append ROOT/src
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT / "src"))

from env.loader import load_grid_config  # noqa: E402
from nav_core import initialize  # noqa: E402


def main(argv=None) -> int:
    """Load, build and print the active grid profile, failing fast on errors."""
    argv = sys.argv[1:] if argv is None else argv
    profile = argv[0] if argv else None

    try:
        config = load_grid_config(profile=profile)
        engine, grid = initialize(config)  # builds the grid and applies blocked cells
    except Exception as e:                 # report any config error and fail
        print("Grid config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        return 1                           # non-zero exit: CI will mark as failed

    walkable = sum(1 for cell in grid.cells() if cell.walkable)

    print("Grid config validation OK.")
    print("\nActive profile:", config.name)
    print("\nResolved config:")
    pprint(config)
    print(f"\nCells: {len(grid)} ({walkable} walkable)")
    print("Diagonal movement:", engine.diagonal_movement)
    return 0


if __name__ == "__main__":
    sys.exit(main())  # run main() only when script is executed directly
