# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict


class SortKey(StrEnum):
    PRIORITY = "priority"
    DUE_DATE = "due_date"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortConfig(TypedDict):
    primary: SortKey
    secondary: Optional[SortKey]
    direction: SortDirection


def get_default_sort_config() -> SortConfig:
    return {
        "primary": SortKey.DUE_DATE,
        "secondary": None,
        "direction": SortDirection.ASC,
    }
