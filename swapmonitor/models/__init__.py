"""Pydantic models for swap state rows and their rendered views."""

from swapmonitor.models.swaps import SwapRecord, SwapView

__all__ = ["SwapRecord", "SwapView"]
