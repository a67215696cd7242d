# SPDX-License-Identifier: MIT

from tasklist.repository.id_map import ID_MAP_REPO
from tasklist.view import state as view_state


def clear_id_map_if_required() -> None:
    if view_state.get_clear_ids():
        ID_MAP_REPO.clear_ids()
