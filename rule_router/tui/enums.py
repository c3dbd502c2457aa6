from enum import Enum

from rule_router.models import MatchTier


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


MATCH_TIER_STYLE = {
    MatchTier.EXPLICIT_MENTION: UIStyle.MAGENTA.value,
    MatchTier.FILE_EXTENSION: UIStyle.GREEN.value,
    MatchTier.PROJECT_MANIFEST: UIStyle.CYAN.value,
    MatchTier.KEYWORD: UIStyle.YELLOW.value,
}
