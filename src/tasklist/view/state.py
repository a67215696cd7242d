"""Per-invocation view settings held in context variables."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Context variable for controlling header visibility in reports
# Default is True (show headers)
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)

# Context variable for clearing the synthetic id map before a list is shown
_clear_ids_var: ContextVar[bool] = ContextVar("clear_ids", default=True)


def set_show_header(value: bool) -> None:
    """Set whether headers should be displayed in reports.

    Args:
        value: True to show headers, False to hide them
    """
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_clear_ids(value: bool) -> None:
    _clear_ids_var.set(value)


def get_clear_ids() -> bool:
    return _clear_ids_var.get()
