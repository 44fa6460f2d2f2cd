"""Theme and visual constants for the command-line report."""

from rich.box import SIMPLE
from rich.style import Style
from rich.theme import Theme

# ── Rich theme ─────────────────────────────────────────────────────────────────

REPORT_THEME = Theme(
    {
        "info": Style(color="bright_cyan"),
        "success": Style(color="bright_green", bold=True),
        "warning": Style(color="bright_yellow"),
        "error": Style(color="bright_red", bold=True),
        "muted": Style(color="white", dim=True),
        "header": Style(color="bright_cyan", bold=True),
    }
)

# ── Unicode icons ──────────────────────────────────────────────────────────────

ICON_CHECK = "\u2713"       # ✓
ICON_CROSS = "\u2717"       # ✗

# ── Box styles ─────────────────────────────────────────────────────────────────

TABLE_BOX = SIMPLE
