"""Package entry point for ``python -m pairmark``.

WHY: Users run the tool as ``python -m pairmark tokens.json`` without
installing the console script.

HOW: Delegates to the CLI's main() function.
"""

from pairmark.cli import main

if __name__ == "__main__":
    main()
