# SPDX-License-Identifier: MIT

import atexit

from tasklist.repository.configuration import CONFIGURATION_REPO
from tasklist.repository.id_map import ID_MAP_REPO


def flush() -> None:
    # Task documents are written as they change; only local state is buffered
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
