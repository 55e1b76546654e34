"""Run the taskperm CLI with `python -m taskperm`."""

from taskperm.cli import main

if __name__ == "__main__":
    main()
