"""Kernel value types."""

from eventflit.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
