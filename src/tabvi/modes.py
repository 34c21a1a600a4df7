"""Editing modes."""

from __future__ import annotations

from enum import Enum


class Mode(Enum):
    NORMAL = "Normal"
    INSERT = "Insert"
    COMMAND = "Command"

    def __str__(self) -> str:
        return self.value
