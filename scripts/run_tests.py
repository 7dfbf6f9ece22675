"""Run test suite with different options."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    """Run tests based on command line arguments."""
    args = sys.argv[1:]

    if "--browser" in args:
        # Browser suite against the running sample app, one retry per test
        return pytest.main(["-m", "browser", "-v", "-s"])
    elif "--all" in args:
        return pytest.main(["-v", "-s"])
    else:
        # Unit tests only (default)
        return pytest.main(["-v", "-m", "not integration and not browser"])


if __name__ == "__main__":
    sys.exit(main())
