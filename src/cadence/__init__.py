# SPDX-License-Identifier: MIT

from cadence.initialize import initialize
from cadence.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
