# reports/composer.py
from __future__ import annotations
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from . import config
from .canvas import DocumentCanvas, ReportLabCanvas
from .schema import ReportRequest
from .tables import StripedTableEngine, TableLayoutEngine


class ReportComposer:
    """
    Lays out a ReportRequest as a paginated tabular PDF.

    Collaborators are injected once and shared by every call; each call opens
    its own canvas, so concurrent calls never share a cursor or a document.
    Nothing is caught here: layout, asset and save errors reach the caller
    and no file is written unless the whole document was laid out.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        table_engine: Optional[TableLayoutEngine] = None,
        canvas_factory: Callable[[], DocumentCanvas] = ReportLabCanvas,
        logo_path: Union[str, Path] = config.LOGO_PATH,
    ):
        self.output_dir = Path(output_dir)
        self.table_engine = table_engine or StripedTableEngine()
        self.canvas_factory = canvas_factory
        self.logo_path = Path(logo_path)

    def output_path(self, request: ReportRequest) -> Path:
        return self.output_dir / request.file_name

    def _masthead(self, doc: DocumentCanvas) -> None:
        doc.add_image(self.logo_path, *config.LOGO_BOX)
        doc.set_font(config.FONT_BOLD, config.ORG_NAME_SIZE)
        doc.text(config.ORG_NAME, *config.ORG_NAME_POS)

    def generate_report(self, request: ReportRequest) -> None:
        logger.info(f"Generating report '{request.title}' ({len(request.sections)} sections)")
        doc = self.canvas_factory()

        self._masthead(doc)
        doc.set_font(config.FONT, config.TITLE_SIZE)
        doc.text(request.title, *config.TITLE_POS)
        doc.set_font(config.FONT, config.SUBTITLE_SIZE)
        doc.text(request.subtitle, *config.SUBTITLE_POS)

        cursor = config.CURSOR_START
        for section in request.sections:
            # checked once per section; overflow inside a table is the engine's job
            if doc.page_height - cursor < config.PAGE_BREAK_THRESHOLD:
                doc.add_page()
                cursor = config.TOP_MARGIN
                logger.debug(f"page break before section '{section.title}'")

            doc.set_font(config.FONT, config.HEADING_SIZE)
            doc.text(section.title, config.MARGIN_LEFT, cursor)
            cursor += config.HEADING_RULE_GAP
            doc.line(config.MARGIN_LEFT, cursor, config.CONTENT_RIGHT, cursor)
            cursor += config.RULE_TABLE_GAP

            final_y = self.table_engine.draw_table(doc, cursor, section.columns, section.data)
            cursor = final_y + config.POST_TABLE_GAP

        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_path(request)
        doc.save(path)
        logger.info(f"Report saved to {path} ({doc.page_count} page(s))")


def generate_report(request: ReportRequest, output_dir: Union[str, Path] = ".") -> None:
    """One-off convenience wrapper; services should hold a ReportComposer instead."""
    ReportComposer(output_dir).generate_report(request)
