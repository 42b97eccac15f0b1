"""Recording stand-ins for the canvas and table engine."""
from pathlib import Path

from reports import config


class RecordingCanvas:
    page_height = config.PAGE_HEIGHT
    pdf = None

    def __init__(self):
        self.ops = []
        self.page_count = 1
        self.saved_to = None

    def add_image(self, path, x, y, w, h):
        self.ops.append(("image", Path(path).name, x, y, w, h))

    def set_font(self, name, size):
        self.ops.append(("font", name, size))

    def text(self, s, x, y):
        self.ops.append(("text", s, x, y))

    def line(self, x1, y1, x2, y2):
        self.ops.append(("line", x1, y1, x2, y2))

    def add_page(self):
        self.page_count += 1
        self.ops.append(("page",))

    def draw_flowable(self, flowable, x, y, height):
        self.ops.append(("flowable", x, y, height))

    def save(self, path):
        self.saved_to = Path(path)
        self.ops.append(("save", Path(path).name))


class ScriptedEngine:
    """Returns preset table heights and records every table it was asked to draw."""

    def __init__(self, heights=None, default_height=20.0):
        self.heights = list(heights or [])
        self.default_height = default_height
        self.calls = []

    def draw_table(self, canvas, start_y, head, body):
        self.calls.append((start_y, list(head), [list(r) for r in body]))
        canvas.ops.append(("table", list(head), len(body)))
        h = self.heights.pop(0) if self.heights else self.default_height
        return start_y + h


class FailingEngine:
    def __init__(self, exc):
        self.exc = exc

    def draw_table(self, canvas, start_y, head, body):
        raise self.exc
