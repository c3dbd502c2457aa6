from rule_router.tui.renderers import RouterConsoleUI

__all__ = ["RouterConsoleUI"]
