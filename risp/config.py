from __future__ import annotations
import os
from typing import Optional


# Defaults
_DEFAULT_MAX_DEPTH = 200
_DEFAULT_MAX_FRAMES = 0  # 0 -> report every frame


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{var} must not be negative, got {value}")
    return value


def get_max_depth(override: Optional[int] = None) -> int:
    """Maximum nesting of function/macro bodies before evaluation is aborted."""
    if override is not None:
        return override
    return int_from_env('RISP_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_max_frames() -> int:
    return int_from_env('RISP_MAX_FRAMES', _DEFAULT_MAX_FRAMES)
