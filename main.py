"""Generate the documentation model of a type-checked program.

Equivalent to the ``ts2jsdoc`` console script, for running from a checkout.
"""

from ts2jsdoc.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
