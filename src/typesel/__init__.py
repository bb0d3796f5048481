"""typesel: selects the Go types that need generated JSON marshalers."""

from __future__ import annotations

__version__ = "0.1.0"
