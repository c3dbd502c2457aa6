from typing import Optional

from rich.panel import Panel

from rule_router.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str = UIStyle.DIM.value) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def counted(title: str, body, count: int, style: str = UIStyle.BLUE.value) -> Panel:
        """Panel whose subtitle carries a rule count, e.g. ``3 rule(s)``."""
        return UISection.wrap(title, body, style=style, subtitle=f"{count} rule(s)")
