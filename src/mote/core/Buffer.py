# mote/core/Buffer.py
"""mote.core.Buffer
==================

The text buffer of the editor: an ordered list of lines (stored without
newlines) together with the cursor and the document status.

Invariants maintained by every public method:

- ``lines`` is never empty; an empty document is a single empty line.
- ``0 <= cursor_y < len(lines)``.
- ``0 <= cursor_x <= len(lines[cursor_y])`` (``cursor_x`` is a character
  offset, not a screen column).

Files are loaded as bytes, the encoding is detected with ``chardet`` and the
same encoding is used when the buffer is written back.
"""

import logging
from typing import Optional

import chardet

logger = logging.getLogger("mote")

# Detection results below this confidence are not trusted.
MIN_ENCODING_CONFIDENCE = 0.75
CHARDET_SAMPLE_SIZE = 1024 * 20


class FileReadError(Exception):
    """Raised when a file cannot be read into the buffer."""


class FileWriteError(Exception):
    """Raised when the buffer cannot be written to disk."""


class NoFilenameError(FileWriteError):
    """Raised by `Buffer.save` when no file name is bound to the buffer."""


class Buffer:
    """Lines of text plus the cursor that edits them.

    Attributes:
        lines (list[str]): Document content, one entry per line.
        cursor_x (int): Character offset of the cursor within the current line.
        cursor_y (int): Index of the current line.
        filename (Optional[str]): Path the buffer is bound to, if any.
        dirty (bool): True while the buffer holds unsaved changes.
        encoding (str): Encoding used to decode the file and to write it back.
        trailing_newline (bool): Whether the loaded file ended with a newline.
    """

    def __init__(
        self,
        lines: Optional[list[str]] = None,
        filename: Optional[str] = None,
        dirty: bool = False,
    ) -> None:
        self.lines: list[str] = list(lines) if lines else [""]
        self.cursor_x: int = 0
        self.cursor_y: int = 0
        self.filename: Optional[str] = filename
        self.dirty: bool = dirty
        self.encoding: str = "utf-8"
        self.trailing_newline: bool = False

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: str) -> "Buffer":
        """Reads *path* into a new, clean buffer bound to that path.

        Raises:
            FileReadError: If the file cannot be opened or read.
        """
        logging.debug(f"Buffer.load: reading '{path}'")
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise FileReadError(str(e)) from e

        text, encoding = _decode(raw, path)
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        trailing_newline = text.endswith("\n")
        if trailing_newline:
            lines.pop()

        buffer = cls(lines, filename=path, dirty=False)
        buffer.encoding = encoding
        buffer.trailing_newline = trailing_newline
        logger.info(
            f"Loaded '{path}': {len(buffer.lines)} lines, encoding '{encoding}'."
        )
        return buffer

    def save(self, path: Optional[str] = None) -> int:
        """Writes the buffer to *path* or to the bound file name.

        An explicit *path* becomes the bound file name once the write
        succeeds. ``dirty`` is cleared only after a successful write; a failed
        write leaves the buffer untouched.

        Returns:
            int: Number of lines written.

        Raises:
            NoFilenameError: If no path is given and none is bound.
            FileWriteError: If encoding or writing the content fails.
        """
        target = path or self.filename
        if not target:
            raise NoFilenameError("No file name")

        content = "\n".join(self.lines)
        # A trailing empty line exists on disk only as a final newline
        if self.trailing_newline or (len(self.lines) > 1 and self.lines[-1] == ""):
            content += "\n"

        logging.debug(f"Buffer.save: writing '{target}' with encoding '{self.encoding}'")
        try:
            data = content.encode(self.encoding)
            with open(target, "wb") as f:
                f.write(data)
        except (OSError, UnicodeEncodeError, LookupError) as e:
            logger.error(f"Failed to write file '{target}': {e}")
            raise FileWriteError(str(e)) from e

        self.filename = target
        self.dirty = False
        return len(self.lines)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def insert_char(self, char: str) -> None:
        """Inserts *char* at the cursor and advances the cursor past it."""
        line = self.lines[self.cursor_y]
        self.lines[self.cursor_y] = line[: self.cursor_x] + char + line[self.cursor_x :]
        self.cursor_x += 1
        self.dirty = True

    def delete_char_before(self) -> None:
        """Backspace: removes the character left of the cursor.

        At column 0 the current line is joined onto the previous one and the
        cursor lands on the join point. Does nothing at the document start.
        """
        if self.cursor_x > 0:
            line = self.lines[self.cursor_y]
            self.lines[self.cursor_y] = line[: self.cursor_x - 1] + line[self.cursor_x :]
            self.cursor_x -= 1
            self.dirty = True
        elif self.cursor_y > 0:
            current = self.lines.pop(self.cursor_y)
            self.cursor_y -= 1
            self.cursor_x = len(self.lines[self.cursor_y])
            self.lines[self.cursor_y] += current
            self.dirty = True
        else:
            logging.debug("delete_char_before: at beginning of buffer, nothing to do.")

    def delete_char_after(self) -> None:
        """Delete: removes the character under the cursor.

        At the end of a line the next line is joined onto the current one.
        Does nothing at the document end.
        """
        line = self.lines[self.cursor_y]
        if self.cursor_x < len(line):
            self.lines[self.cursor_y] = line[: self.cursor_x] + line[self.cursor_x + 1 :]
            self.dirty = True
        elif self.cursor_y + 1 < len(self.lines):
            self.lines[self.cursor_y] = line + self.lines.pop(self.cursor_y + 1)
            self.dirty = True
        else:
            logging.debug("delete_char_after: at end of buffer, nothing to do.")

    def split_line(self) -> None:
        """Enter: moves the text after the cursor onto a new line below."""
        line = self.lines[self.cursor_y]
        self.lines[self.cursor_y] = line[: self.cursor_x]
        self.lines.insert(self.cursor_y + 1, line[self.cursor_x :])
        self.cursor_y += 1
        self.cursor_x = 0
        self.dirty = True

    # ------------------------------------------------------------------
    # Cursor motion
    # ------------------------------------------------------------------
    def current_line_len(self) -> int:
        return len(self.lines[self.cursor_y])

    def clamp_cursor_x(self) -> None:
        self.cursor_x = max(0, min(self.cursor_x, self.current_line_len()))

    def move_left(self) -> None:
        """Moves left; from column 0 wraps to the end of the previous line."""
        if self.cursor_x > 0:
            self.cursor_x -= 1
        elif self.cursor_y > 0:
            self.cursor_y -= 1
            self.cursor_x = self.current_line_len()

    def move_right(self) -> None:
        """Moves right; from the line end wraps to the start of the next line."""
        if self.cursor_x < self.current_line_len():
            self.cursor_x += 1
        elif self.cursor_y + 1 < len(self.lines):
            self.cursor_y += 1
            self.cursor_x = 0

    def move_up(self) -> None:
        if self.cursor_y > 0:
            self.cursor_y -= 1
            self.clamp_cursor_x()

    def move_down(self) -> None:
        if self.cursor_y + 1 < len(self.lines):
            self.cursor_y += 1
            self.clamp_cursor_x()

    def move_line_start(self) -> None:
        self.cursor_x = 0

    def move_line_end(self) -> None:
        self.cursor_x = self.current_line_len()

    def goto_first_line(self) -> None:
        self.cursor_y = 0
        self.cursor_x = 0

    def goto_last_line(self) -> None:
        self.cursor_y = len(self.lines) - 1
        self.cursor_x = self.current_line_len()

    def move_rows(self, delta: int) -> None:
        """Moves the cursor *delta* rows, clamped to the buffer, then clamps the column."""
        self.cursor_y = max(0, min(self.cursor_y + delta, len(self.lines) - 1))
        self.clamp_cursor_x()


def _decode(raw: bytes, path: str) -> tuple[str, str]:
    """Decodes file bytes, returning the text and the encoding that worked.

    The chardet guess is tried first when it is confident enough, then strict
    UTF-8, then Latin-1 (which accepts any byte sequence).
    """
    if not raw:
        return "", "utf-8"

    candidates: list[str] = []
    result = chardet.detect(raw[:CHARDET_SAMPLE_SIZE])
    guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logging.debug(
        f"Chardet detected encoding '{guess}' with confidence {confidence:.2f} for '{path}'."
    )
    if guess and confidence >= MIN_ENCODING_CONFIDENCE:
        # ASCII content may later gain non-ASCII characters; write it back as UTF-8
        candidates.append("utf-8" if guess.lower() == "ascii" else guess.lower())
    for fallback in ("utf-8", "latin-1"):
        if fallback not in candidates:
            candidates.append(fallback)

    for encoding in candidates:
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError) as e:
            logging.warning(f"Failed to decode '{path}' as '{encoding}': {e}")
    # latin-1 maps every byte, so the loop above always returns
    raise FileReadError(f"Could not decode '{path}'")
