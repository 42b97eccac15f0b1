# reports/tables.py
from __future__ import annotations
from typing import List, Protocol, Sequence
from xml.sax.saxutils import escape

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Table, TableStyle

from . import config
from .canvas import DocumentCanvas
from .exceptions import TableLayoutError


class TableLayoutEngine(Protocol):
    def draw_table(self, canvas, start_y: float, head: Sequence[str], body: Sequence[Sequence]) -> float:
        """Render a table at ``start_y`` and return the offset of its bottom edge."""
        ...


def _rgb(t) -> colors.Color:
    r, g, b = t
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


def _cell_text(cell) -> str:
    return escape(cell if isinstance(cell, str) else str(cell))


def validate_rows(head: Sequence[str], body: Sequence[Sequence]) -> None:
    if not head:
        raise TableLayoutError("table has no columns")
    width = len(head)
    for i, row in enumerate(body):
        if not isinstance(row, (list, tuple)):
            raise TableLayoutError(f"row {i} is not a sequence of cells")
        if len(row) != width:
            raise TableLayoutError(f"row {i} has {len(row)} cells, expected {width}")
        for j, cell in enumerate(row):
            if isinstance(cell, bool) or not isinstance(cell, (str, int, float)):
                raise TableLayoutError(f"row {i} column {j}: unsupported cell type {type(cell).__name__}")


class StripedTableEngine:
    """Striped tables over reportlab's platypus ``Table``.

    The table spans the content width with equal column widths, wraps long
    cell text and repeats the header row on every page it flows onto.
    """

    def __init__(self, header_fill=config.HEADER_FILL, stripe_fill=config.STRIPE_FILL,
                 font_size: float = config.TABLE_FONT_SIZE):
        self.header_fill = _rgb(header_fill)
        self.stripe_fill = _rgb(stripe_fill)
        self.head_style = ParagraphStyle(
            "table-head", fontName=config.FONT_BOLD, fontSize=font_size,
            leading=font_size * 1.2, textColor=colors.white,
        )
        self.body_style = ParagraphStyle(
            "table-body", fontName=config.FONT, fontSize=font_size,
            leading=font_size * 1.2, textColor=colors.black,
        )

    def _build(self, head: Sequence[str], body: Sequence[Sequence]) -> Table:
        data: List[list] = [[Paragraph(_cell_text(c), self.head_style) for c in head]]
        data += [[Paragraph(_cell_text(c), self.body_style) for c in row] for row in body]

        col_w = config.CONTENT_WIDTH * mm / len(head)
        # rows taller than the free space are split between pages, not moved whole
        table = Table(data, colWidths=[col_w] * len(head), repeatRows=1, splitInRow=1, hAlign="LEFT")
        cmds = [
            ('BACKGROUND', (0, 0), (-1, 0), self.header_fill),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('LEFTPADDING', (0, 0), (-1, -1), config.CELL_PADDING),
            ('RIGHTPADDING', (0, 0), (-1, -1), config.CELL_PADDING),
            ('TOPPADDING', (0, 0), (-1, -1), config.CELL_PADDING),
            ('BOTTOMPADDING', (0, 0), (-1, -1), config.CELL_PADDING),
        ]
        if body:
            cmds.append(('ROWBACKGROUNDS', (0, 1), (-1, -1), [self.stripe_fill, colors.white]))
        table.setStyle(TableStyle(cmds))
        return table

    def draw_table(self, canvas: DocumentCanvas, start_y: float, head, body) -> float:
        validate_rows(head, body)
        pending = [self._build(head, body)]
        width = config.CONTENT_WIDTH * mm
        y = start_y

        while pending:
            flow = pending.pop(0)
            avail = (canvas.page_height - config.BOTTOM_MARGIN - y) * mm
            _, h = flow.wrapOn(canvas.pdf, width, avail)
            if h <= avail:
                canvas.draw_flowable(flow, config.MARGIN_LEFT, y, h)
                y += h / mm
                continue

            parts = flow.split(width, avail) if avail > 0 else []
            if len(parts) >= 2:
                first, rest = parts[0], list(parts[1:])
                _, fh = first.wrapOn(canvas.pdf, width, avail)
                canvas.draw_flowable(first, config.MARGIN_LEFT, y, fh)
                pending = rest + pending
            elif y <= config.TOP_MARGIN:
                raise TableLayoutError("a table row cannot be split to fit the printable page height")
            else:
                pending.insert(0, flow)

            canvas.add_page()
            y = config.TOP_MARGIN
            logger.debug(f"table continues on page {canvas.page_count}")

        return y
