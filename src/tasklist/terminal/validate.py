# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from tasklist import configuration


def validate_page_size(page_size: Optional[int]) -> Optional[int]:
    if page_size is None:
        return None
    if page_size not in configuration.PAGE_SIZE_OPTIONS:
        raise typer.BadParameter(
            f"Page size must be one of {', '.join(str(s) for s in configuration.PAGE_SIZE_OPTIONS)}"
        )
    return page_size


def validate_page(page: Optional[int]) -> Optional[int]:
    if page is None:
        return None
    if page < 1:
        raise typer.BadParameter("Page must be at least 1")
    return page


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    log_level = log_level.upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise typer.BadParameter("Log level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
    return log_level
