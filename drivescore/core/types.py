# drivescore/core/types.py
# -*- coding: utf-8 -*-

"""
Shared type aliases.

Contents
--------
- StrPath: str or pathlib.Path
- Number: int or float
- AnyMapping: read-only record as handed over by the telemetry/settings providers
- TripRecord: alias of AnyMapping used where a raw provider trip is expected
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Union


StrPath = Union[str, Path]
"""Path representation accepted by the loaders (string or Path)."""

Number = Union[int, float]
"""Numeric value (int or float)."""

AnyMapping = Mapping[str, Any]

TripRecord = AnyMapping
"""Raw trip as delivered by the telemetry provider (camelCase or snake_case keys)."""
