"""
Input and output files.

Input is one company name per line. Output gets one ``"<company> : <email>"``
line per record, appended in processing order.
"""

import logging
import time
from typing import IO, List, Optional

from email_scraper.errors import WriteError
from email_scraper.models import ContactRecord

# Initialize logger
log = logging.getLogger(__name__)

DEFAULT_INPUT_FILE = "companies-list/input.txt"


def default_output_name(now: Optional[float] = None) -> str:
    stamp = int(now if now is not None else time.time())
    return f"company_emails_{stamp}.txt"


def read_company_names(path: str) -> List[str]:
    """
    Read company names, one per line.

    Blank lines are kept as empty names. Only the line terminator is removed;
    other leading and trailing whitespace is part of the name. Bytes that are
    not valid UTF-8 are kept as surrogate escapes and written back unchanged
    by :class:`ContactWriter`.

    Raises:
        OSError: the file cannot be opened or read
    """
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as fh:
        content = fh.read()

    names = content.split("\n")
    # A trailing newline ends the last line, it does not start a new one.
    if names and names[-1] == "":
        names.pop()
    names = [n[:-1] if n.endswith("\r") else n for n in names]
    log.info("Loaded %d companies from %s", len(names), path)
    return names


class ContactWriter:
    """Appends contact records to an output file, one flushed line each."""

    def __init__(self, path: str, append: bool = False):
        self.path = path
        self.append = append
        self._fh: Optional[IO[str]] = None
        self.lines_written = 0

    def open(self) -> "ContactWriter":
        """
        Open (or create) the output file.

        Raises:
            OSError: the file cannot be created
        """
        mode = "a" if self.append else "w"
        self._fh = open(self.path, mode, encoding="utf-8", errors="surrogateescape", newline="")
        log.debug("Opened output file %s (mode %s)", self.path, mode)
        return self

    def write(self, record: ContactRecord) -> None:
        if self._fh is None:
            raise WriteError(f"failed to write to file: {self.path} is not open")
        try:
            self._fh.write(record.to_line())
            self._fh.flush()
        except OSError as e:
            raise WriteError(f"failed to write to file {self.path}: {e}") from e
        self.lines_written += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "ContactWriter":
        if self._fh is None:
            self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
