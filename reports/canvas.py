"""
Drawing surface used by the composer.

Coordinates are millimetres measured from the top-left corner of the page,
which is how the report layout is written; reportlab's native space is points
from the bottom-left, so every call converts on the way in.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Optional, Protocol, Tuple, Union, runtime_checkable

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import Flowable

from . import config


@runtime_checkable
class DocumentCanvas(Protocol):
    page_height: float
    page_count: int
    pdf: Any  # underlying reportlab canvas, used by the table engine to wrap flowables

    def add_image(self, path: Union[str, Path], x: float, y: float, w: float, h: float) -> None: ...
    def set_font(self, name: str, size: float) -> None: ...
    def text(self, s: str, x: float, y: float) -> None: ...
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...
    def add_page(self) -> None: ...
    def draw_flowable(self, flowable: Flowable, x: float, y: float, height: float) -> None: ...
    def save(self, path: Union[str, Path]) -> None: ...


class ReportLabCanvas:
    """A4 canvas over ``reportlab.pdfgen.canvas.Canvas``.

    The PDF is kept in memory until :meth:`save`, so a failure halfway
    through a report never leaves a file on disk.
    """

    def __init__(self, invariant: Optional[bool] = None, page_compression: bool = True):
        self.page_width = A4[0] / mm
        self.page_height = A4[1] / mm
        self.page_count = 1
        self._font: Tuple[str, float] = (config.FONT, config.SUBTITLE_SIZE)
        inv = config.PDF_INVARIANT if invariant is None else invariant
        # bytes are pulled with getpdfdata(), this name is never written to
        self.pdf = rl_canvas.Canvas(
            "report.pdf", pagesize=A4, invariant=1 if inv else 0, pageCompression=1 if page_compression else 0,
        )
        self.pdf.setFont(*self._font)

    # ---------- coordinate helpers ----------
    def _x(self, x: float) -> float:
        return x * mm

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    # ---------- primitives ----------
    def add_image(self, path, x, y, w, h) -> None:
        # ImageReader raises if the asset is missing or unreadable; no fallback
        self.pdf.drawImage(str(path), self._x(x), self._y(y + h), width=w * mm, height=h * mm, mask="auto")

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, size)
        self.pdf.setFont(name, size)

    def text(self, s: str, x: float, y: float) -> None:
        self.pdf.drawString(self._x(x), self._y(y), s)

    def line(self, x1, y1, x2, y2) -> None:
        self.pdf.line(self._x(x1), self._y(y1), self._x(x2), self._y(y2))

    def add_page(self) -> None:
        self.pdf.showPage()
        # showPage resets graphics state; keep the current font across pages
        self.pdf.setFont(*self._font)
        self.page_count += 1

    def draw_flowable(self, flowable: Flowable, x: float, y: float, height: float) -> None:
        """Draw an already-wrapped flowable (height in points) with its top-left corner at (x, y)."""
        self.pdf.saveState()
        flowable.drawOn(self.pdf, self._x(x), self._y(y) - height)
        self.pdf.restoreState()

    def save(self, path) -> None:
        path = Path(path)
        self.pdf.setTitle(path.stem)
        data = self.pdf.getpdfdata()  # closes the current page
        path.write_bytes(data)
