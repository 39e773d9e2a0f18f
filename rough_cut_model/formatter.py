"""
Plain-text rendering of rough cut results for the terminal.

Tables are described by Column specs that know how to render hour and
percentage figures, so report code hands over row dicts straight from a
RunResult. Everything returned here is plain text; colorize() adds ANSI
codes afterwards when the terminal supports it.

No external dependencies.
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple


def supports_color() -> bool:
    """Whether stdout should get ANSI colors (honours NO_COLOR and FORCE_COLOR)."""
    if os.environ.get('NO_COLOR') is not None:
        return False
    if os.environ.get('FORCE_COLOR') is not None:
        return True
    return getattr(sys.stdout, 'isatty', lambda: False)()


RULE = '─'
BANNER_RULE = '═'
BULLET = '·'
MARKER = '▸'

# Corner/junction glyphs per border row: (left, middle, right)
_BORDERS = {
    'top': ('┌', '┬', '┐'),
    'mid': ('├', '┼', '┤'),
    'bottom': ('└', '┴', '┘'),
}
_BAR = '│'


# ── Figures ────────────────────────────────────────────────────────

def hours(value: float, suffix: str = "hrs") -> str:
    """Hour figure with at most one decimal; '36 hrs', '43.2 hrs/project'."""
    text = f"{value:,.1f}"
    if text.endswith('.0'):
        text = text[:-2]
    return f"{text} {suffix}" if suffix else text


def percent(value: Optional[int]) -> str:
    """Whole percentage, or 'N/A' when a contribution is undefined."""
    if value is None:
        return 'N/A'
    return f"{value}%"


def workweeks(value: float) -> str:
    return f"{value:.1f} workweeks"


@dataclass
class Column:
    """
    One table column bound to a row-dict key.

    kind selects rendering and alignment: 'text' is left aligned, 'hours',
    'percent' and 'count' are right aligned.
    """
    key: str
    header: str
    kind: str = 'text'
    suffix: str = 'hrs'

    @property
    def align(self) -> str:
        return 'l' if self.kind == 'text' else 'r'

    def render(self, row: Dict[str, Any]) -> str:
        value = row.get(self.key)
        if self.kind == 'hours':
            return hours(value, self.suffix) if value is not None else 'N/A'
        if self.kind == 'percent':
            return percent(value)
        if value is None:
            return ''
        return str(value)


# ── Layout ─────────────────────────────────────────────────────────

def banner(text: str, width: int = 60) -> str:
    """Run title centred in a heavy rule: '═══ Rough Cut Optimization ═══'."""
    fill = max(width - len(text) - 2, 4)
    return f"{BANNER_RULE * (fill // 2)} {text} {BANNER_RULE * (fill - fill // 2)}"


def section(name: str, body: str = "") -> str:
    """Underlined section name followed by its body, if any."""
    head = f"  {name}\n  {RULE * len(name)}"
    return f"{head}\n{body}" if body else head


def leaders(items: Sequence[Tuple[str, str]], indent: int = 2) -> str:
    """Label/value pairs joined by dot leaders, values lined up."""
    if not items:
        return ""
    width = max(len(label) for label, _ in items) + 2
    pad = ' ' * indent
    return "\n".join(
        f"{pad}{label} {BULLET * (width - len(label))} {value}" for label, value in items
    )


def table(columns: Sequence[Column], rows: Sequence[Dict[str, Any]]) -> str:
    """
    Bordered table of row dicts.

    Example::

        ┌──────────────┬───────────┐
        │ Scenario     │ Reduction │
        ├──────────────┼───────────┤
        │ Conservative │       50% │
        └──────────────┴───────────┘
    """
    if not columns:
        return ""

    body = [[col.render(row) for col in columns] for row in rows]
    widths = [
        max([len(col.header)] + [len(cells[i]) for cells in body])
        for i, col in enumerate(columns)
    ]

    def border(kind: str) -> str:
        left, mid, right = _BORDERS[kind]
        return left + mid.join(RULE * (w + 2) for w in widths) + right

    def line(cells: List[str]) -> str:
        padded = [
            cell.ljust(w) if col.align == 'l' else cell.rjust(w)
            for cell, col, w in zip(cells, columns, widths)
        ]
        return _BAR + _BAR.join(f" {p} " for p in padded) + _BAR

    out = [border('top'), line([col.header for col in columns]), border('mid')]
    out.extend(line(cells) for cells in body)
    out.append(border('bottom'))
    return "\n".join(out)


def highlight(label: str, value: str, indent: int = 2) -> str:
    """Headline figure for one scenario: '▸ Best Case: 292 hrs'."""
    return f"{' ' * indent}{MARKER} {label}: {value}"


def footnotes(notes: Sequence[str], indent: int = 2) -> str:
    return "\n".join(f"{' ' * indent}{BULLET} {note}" for note in notes)


def rule(width: int = 60) -> str:
    return RULE * width


# ── ANSI colors ────────────────────────────────────────────────────

_RESET = '\033[0m'
_BOLD = '\033[1m'
_DIM = '\033[2m'
_GREEN = '\033[32m'
_RED = '\033[31m'
_YELLOW = '\033[33m'
_CYAN = '\033[36m'

# Slower-than-baseline scenarios show up as negative figures
_NEGATIVE_RE = re.compile(r'^-\d[\d,]*\.?\d*(%| hrs.*)?$')
_BORDER_GLYPHS = {glyphs[0] for glyphs in _BORDERS.values()}


def colorize(text: str) -> str:
    """
    Add ANSI colors to text built by this module.

    Banners are bold cyan, rules and borders dim, negative figures red,
    'N/A' dim yellow and highlighted values green.
    """
    return '\n'.join(_colorize_line(line) for line in text.split('\n'))


def _paint(text: str, *codes: str) -> str:
    return ''.join(codes) + text + _RESET


def _colorize_line(line: str) -> str:
    stripped = line.strip()
    if not stripped:
        return line

    if BANNER_RULE in line:
        return _paint(line, _BOLD, _CYAN)
    if set(stripped) == {RULE} or stripped[0] in _BORDER_GLYPHS:
        return _paint(line, _DIM)
    if _BAR in line:
        return _paint(_BAR, _DIM).join(_colorize_cell(c) for c in line.split(_BAR))
    if stripped.startswith(MARKER):
        lead, _, rest = line.partition(MARKER)
        label, sep, value = rest.partition(': ')
        value = _paint(value, _GREEN) if sep else value
        return f"{lead}{_paint(MARKER, _YELLOW)}{label}{sep}{value}"
    if stripped.startswith(BULLET):
        return _paint(line, _DIM)
    return line


def _colorize_cell(cell: str) -> str:
    figure = cell.strip()
    if _NEGATIVE_RE.match(figure):
        return cell.replace(figure, _paint(figure, _RED))
    if figure == 'N/A':
        return cell.replace(figure, _paint(figure, _DIM, _YELLOW))
    return cell
