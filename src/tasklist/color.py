# SPDX-License-Identifier: MIT

from tasklist.model.priority import Priority

# Color constant for completed tasks
COMPLETED_TASK_COLOR = "bright_black"

# Color constant for tasks past their due date
OVERDUE_TASK_COLOR = "red"

PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}
