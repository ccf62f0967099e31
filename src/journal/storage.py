"""Line-oriented journal file: append encoded entries, read them back."""

from pathlib import Path

import structlog

from .record import DailyScore, ParseError, decode, encode

logger = structlog.get_logger()


class JournalError(Exception):
    """Base error for journal file operations."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class JournalOpenError(JournalError):
    """Journal file cannot be opened."""

    def __init__(self, path: Path):
        super().__init__(f"cannot open journal file '{path}'", path)


class JournalReadError(JournalError):
    """Journal file cannot be read or is not valid UTF-8."""

    def __init__(self, path: Path):
        super().__init__(f"cannot read line from journal file '{path}'", path)


class JournalParseError(JournalError):
    """A line of the journal is not a valid record."""

    def __init__(self, path: Path, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"cannot parse daily score data '{line}' (line {line_number})", path)


class JournalWriteError(JournalError):
    """Entry cannot be appended to the journal file."""

    def __init__(self, path: Path):
        super().__init__(f"cannot append to journal file '{path}'", path)


class JournalStorage:
    """Daily scores kept one per line in a UTF-8 text file."""

    def __init__(self, journal_file: str | Path):
        self.journal_file = Path(journal_file).expanduser()

    def append(self, daily_score: DailyScore) -> Path:
        """Append one entry, creating the file (and its directory) if needed."""
        line = encode(daily_score)
        try:
            self.journal_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.journal_file, "a", encoding="utf-8", newline="\n") as f:
                f.write(line + "\n")
        except OSError as e:
            raise JournalWriteError(self.journal_file) from e

        logger.debug("journal_entry_appended", path=str(self.journal_file), score=daily_score.score)
        return self.journal_file

    def read(self, skip_invalid: bool = False) -> list[DailyScore]:
        """Decode every line of the journal.

        Blank lines are ignored. The first invalid line aborts the read unless
        `skip_invalid` is set, in which case it is logged and skipped.

        Raises:
            JournalOpenError: file missing or unreadable
            JournalReadError: I/O or decoding failure while reading
            JournalParseError: invalid record line (chained to the ParseError)
        """
        try:
            f = open(self.journal_file, encoding="utf-8")
        except OSError as e:
            raise JournalOpenError(self.journal_file) from e

        daily_scores = []
        skipped = 0
        with f:
            try:
                for line_number, line in enumerate(f, start=1):
                    line = line.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        daily_scores.append(decode(line))
                    except ParseError as e:
                        if not skip_invalid:
                            raise JournalParseError(self.journal_file, line_number, line) from e
                        skipped += 1
                        logger.warning(
                            "journal_line_skipped",
                            path=str(self.journal_file),
                            line_number=line_number,
                            error=str(e),
                        )
            except (OSError, UnicodeDecodeError) as e:
                raise JournalReadError(self.journal_file) from e

        logger.debug(
            "journal_read", path=str(self.journal_file), entries=len(daily_scores), skipped=skipped
        )
        return daily_scores
