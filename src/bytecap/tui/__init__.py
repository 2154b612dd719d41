"""Interactive textual monitor for bytecap."""

from bytecap.tui.app import BytecapApp, run_tui

__all__ = ["BytecapApp", "run_tui"]
