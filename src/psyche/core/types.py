"""Shared type aliases for the core and domain layers."""
from typing import Literal

CompoundLogic = Literal["AND", "OR"]
Severity = Literal["ERROR", "WARN"]

__all__ = ["CompoundLogic", "Severity"]
