# SPDX-License-Identifier: MIT

from enum import StrEnum


class Status(StrEnum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
