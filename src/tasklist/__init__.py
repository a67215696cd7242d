# SPDX-License-Identifier: MIT

from tasklist.cleanup import register_cleanup
from tasklist.initialize import initialize
from tasklist.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
