# mote/core/Viewport.py
import logging


class Viewport:
    """Vertical scroll state of the text area.

    After every call to `scroll_to` the cursor row is visible:
    ``offset <= cursor_row < offset + height``.
    """

    def __init__(self, offset: int = 0) -> None:
        self.offset: int = max(0, offset)

    def scroll_to(self, cursor_row: int, height: int) -> None:
        """Adjusts the offset by the minimum amount that keeps *cursor_row* visible."""
        height = max(1, height)
        if cursor_row < self.offset:
            self.offset = cursor_row
        elif cursor_row >= self.offset + height:
            self.offset = cursor_row - height + 1
        logging.debug(f"Viewport: row {cursor_row}, height {height} -> offset {self.offset}")

    def visible_rows(self, height: int, line_count: int) -> range:
        """Buffer line indices shown in a text area of *height* rows."""
        return range(self.offset, min(self.offset + max(1, height), line_count))
