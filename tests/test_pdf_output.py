"""End-to-end rendering with reportlab."""
import tempfile
import unittest
from pathlib import Path

from reports import ReportComposer, ReportRequest, Section, TableLayoutError
from reports.canvas import ReportLabCanvas

EXAMPLE = {
    "title": "Reporte Financiero",
    "subtitle": "Periodo: Este Mes",
    "sections": [{
        "title": "Ingresos",
        "columns": ["Fecha", "Monto"],
        "data": [["2024-05-01", "$120.00"], ["2024-05-02", "$80.00"]],
    }],
    "fileName": "reporte.pdf",
}


class TestPdfOutput(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.out = Path(self.tmp.name)
        self.canvases = []

    def tearDown(self):
        self.tmp.cleanup()

    def _factory(self):
        c = ReportLabCanvas(invariant=True)
        self.canvases.append(c)
        return c

    def _composer(self, out=None, **kw):
        return ReportComposer(out or self.out, canvas_factory=self._factory, **kw)

    def test_example_report_is_one_page(self):
        self._composer().generate_report(ReportRequest.model_validate(EXAMPLE))
        path = self.out / "reporte.pdf"
        self.assertTrue(path.is_file())
        self.assertTrue(path.read_bytes().startswith(b"%PDF"))
        self.assertEqual(self.canvases[0].page_count, 1)

    def test_zero_sections(self):
        self._composer().generate_report(ReportRequest(title="T", subtitle="S", sections=[], file_name="empty.pdf"))
        self.assertTrue((self.out / "empty.pdf").is_file())
        self.assertEqual(self.canvases[0].page_count, 1)

    def test_identical_requests_give_identical_bytes(self):
        request = ReportRequest.model_validate(EXAMPLE)
        a, b = self.out / "a", self.out / "b"
        self._composer(a).generate_report(request)
        self._composer(b).generate_report(request)
        self.assertEqual((a / "reporte.pdf").read_bytes(), (b / "reporte.pdf").read_bytes())

    def test_long_table_flows_onto_more_pages(self):
        rows = [[f"2024-05-{i % 28 + 1:02d}", f"Paciente {i}", float(i)] for i in range(150)]
        request = ReportRequest(
            title="Citas", subtitle="Global",
            sections=[Section(title="Citas", columns=["Fecha", "Paciente", "Monto"], data=rows)],
            file_name="largo.pdf",
        )
        self._composer().generate_report(request)
        self.assertGreater(self.canvases[0].page_count, 1)
        self.assertTrue((self.out / "largo.pdf").is_file())

    def test_many_small_sections_break_pages(self):
        sections = [Section(title=f"Sección {i}", columns=["A", "B"], data=[["x", i]]) for i in range(20)]
        self._composer().generate_report(ReportRequest(title="T", subtitle="S", sections=sections, file_name="s.pdf"))
        self.assertGreater(self.canvases[0].page_count, 1)

    def test_long_text_cell_is_written_not_rejected(self):
        request = ReportRequest(
            title="Notas", subtitle="S",
            sections=[Section(title="Notas", columns=["Fecha", "Nota"], data=[["2024-05-01", "palabra " * 3000]])],
            file_name="notas.pdf",
        )
        self._composer().generate_report(request)
        self.assertTrue((self.out / "notas.pdf").is_file())
        self.assertGreater(self.canvases[0].page_count, 2)

    def test_headings_and_header_rows_in_document_order(self):
        sections = [
            Section(title="Ingresos", columns=["Fecha", "Monto"], data=[["2024-05-01", "$120.00"]]),
            Section(title="Gastos", columns=["Concepto", "Importe"], data=[]),
        ]
        composer = ReportComposer(self.out, canvas_factory=lambda: ReportLabCanvas(invariant=True, page_compression=False))
        composer.generate_report(ReportRequest(title="T", subtitle="S", sections=sections, file_name="orden.pdf"))
        pdf = (self.out / "orden.pdf").read_bytes()

        marks = [b"(Ingresos)", b"(Fecha)", b"(Monto)", b"(Gastos)", b"(Concepto)", b"(Importe)"]
        positions = [pdf.find(m) for m in marks]
        self.assertNotIn(-1, positions)
        self.assertEqual(positions, sorted(positions))

    def test_row_arity_mismatch_raises_and_writes_nothing(self):
        request = ReportRequest(
            title="T", subtitle="S",
            sections=[Section(title="Bad", columns=["A", "B"], data=[["only one"]])],
            file_name="bad.pdf",
        )
        with self.assertRaises(TableLayoutError):
            self._composer().generate_report(request)
        self.assertFalse((self.out / "bad.pdf").exists())

    def test_missing_logo_propagates(self):
        composer = self._composer(logo_path=self.out / "missing.png")
        with self.assertRaises(OSError):
            composer.generate_report(ReportRequest(title="T", subtitle="S", file_name="x.pdf"))
        self.assertFalse((self.out / "x.pdf").exists())


if __name__ == "__main__":
    unittest.main()
