"""Rendering collaborator for the time picker.

:class:`ListViewport` models a scrollable list that shows a fixed number of
rows and answers "bring this row into view" requests. :class:`PanelView`
pairs one viewport per column and exposes the ``ensure_visible(column, index,
alignment)`` capability the selector calls.

The Pillow helpers compose the panel and the trigger button as L-mode images.
Selected cells are inverted, the focused cell is outlined and disabled cells
are struck through.
"""
from typing import List, Optional, Tuple
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from timepicker.selector_core import ALIGN_CENTER, ALIGN_NEAREST, Cell, Column

PANEL_W = 160
ROW_H = 36
DEFAULT_VISIBLE_ROWS = 6

FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
]


def _choose_font_path():
    for p in FONT_PATHS:
        try:
            if Path(p).exists():
                return p
        except OSError:
            continue
    return None


def _load_font(size: int):
    font_path = _choose_font_path()
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            pass
    return ImageFont.load_default()


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int]:
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


class ListViewport:
    """Scroll window over a list of *size* rows showing *visible_rows* at a time."""

    def __init__(self, size: int, visible_rows: int = DEFAULT_VISIBLE_ROWS):
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self.visible_rows = max(1, min(visible_rows, size))
        self.top = 0

    @property
    def max_top(self) -> int:
        return self.size - self.visible_rows

    def visible_range(self) -> range:
        return range(self.top, self.top + self.visible_rows)

    def is_visible(self, index: int) -> bool:
        return index in self.visible_range()

    def ensure_visible(self, index: int, alignment: str = ALIGN_NEAREST) -> int:
        """Scroll so *index* is shown; return the new top row.

        ``nearest`` scrolls the minimum distance (not at all if the row is
        already shown); ``center`` puts the row in the middle of the window.
        """
        index = max(0, min(self.size - 1, index))
        if alignment == ALIGN_CENTER:
            top = index - self.visible_rows // 2
        elif alignment == ALIGN_NEAREST:
            if index < self.top:
                top = index
            elif index >= self.top + self.visible_rows:
                top = index - self.visible_rows + 1
            else:
                top = self.top
        else:
            raise ValueError(f"Unknown alignment: {alignment!r}")
        self.top = max(0, min(self.max_top, top))
        return self.top


class PanelView:
    """Both column viewports plus rendering of a selector's current state."""

    def __init__(self, visible_rows: int = DEFAULT_VISIBLE_ROWS, panel_width: int = PANEL_W, row_height: int = ROW_H):
        self.visible_rows = visible_rows
        self.panel_width = panel_width
        self.row_height = row_height
        self.viewports = {
            column: ListViewport(column.size, visible_rows) for column in Column
        }
        self.requests: List[Tuple[Column, int, str]] = []

    def ensure_visible(self, column, index: int, alignment: str = ALIGN_NEAREST) -> None:
        column = Column.parse(column)
        self.requests.append((column, index, alignment))
        self.viewports[column].ensure_visible(index, alignment)

    def top(self, column) -> int:
        return self.viewports[Column.parse(column)].top

    def render(self, selector) -> Image.Image:
        return compose_panel(
            selector.cells(Column.HOURS),
            selector.cells(Column.MINUTES),
            hour_top=self.top(Column.HOURS),
            minute_top=self.top(Column.MINUTES),
            visible_rows=self.visible_rows,
            size=(self.panel_width, self.visible_rows * self.row_height),
        )


def compose_panel(
    hour_cells: List[Cell],
    minute_cells: List[Cell],
    hour_top: int = 0,
    minute_top: int = 0,
    visible_rows: int = DEFAULT_VISIBLE_ROWS,
    size: Optional[Tuple[int, int]] = None,
) -> Image.Image:
    w, h = size or (PANEL_W, DEFAULT_VISIBLE_ROWS * ROW_H)
    img = Image.new("L", (w, h), color=255)
    draw = ImageDraw.Draw(img)

    row_h = max(1, h // max(1, visible_rows))
    col_w = w // 2
    font = _load_font(max(10, int(row_h * 0.5)))

    for col_idx, (cells, top) in enumerate(((hour_cells, hour_top), (minute_cells, minute_top))):
        x0 = col_idx * col_w
        for row in range(visible_rows):
            i = top + row
            if i >= len(cells):
                break
            cell = cells[i]
            y0 = row * row_h
            box = (x0 + 4, y0 + 2, x0 + col_w - 4, y0 + row_h - 2)
            fg = 0
            if cell.selected:
                draw.rectangle(box, fill=0)
                fg = 255
            elif cell.focused:
                draw.rectangle(box, outline=0, width=1, fill=0xDD)
            if cell.disabled:
                fg = 0xAA
            tw, th = _text_size(draw, cell.label, font)
            tx = x0 + (col_w - tw) // 2
            ty = y0 + (row_h - th) // 2
            draw.text((tx, ty), cell.label, font=font, fill=fg)
            if cell.disabled:
                mid = y0 + row_h // 2
                draw.line((tx, mid, tx + tw, mid), fill=fg, width=1)

    return img


def compose_trigger(text: str, size: Tuple[int, int] = (PANEL_W, ROW_H)) -> Image.Image:
    """Compose the trigger button showing the current value or placeholder."""
    w, h = size
    img = Image.new("L", (w, h), color=255)
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, w - 1, h - 1), outline=0, width=1)
    font = _load_font(max(10, int(h * 0.45)))
    _, th = _text_size(draw, text, font)
    draw.text((8, (h - th) // 2), text, font=font, fill=0)
    return img


if __name__ == "__main__":
    # quick visual smoke test
    from timepicker.selector_core import TimeSelector

    view = PanelView()
    sel = TimeSelector(value="10:45", min_time="09:30", ensure_visible=view.ensure_visible)
    sel.open_panel()
    sel.scheduler.run_pending()
    view.render(sel).save("/tmp/timepicker_panel.png")
    print("Wrote /tmp/timepicker_panel.png")
