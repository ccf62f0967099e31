"""Daily score records and their single-line text format.

A record line looks like::

    2020-02-01 09:10:11 +0200 | 1 | health,work | slept well

Fields are split on the space-padded separator `` | ``, at most three times.
The comment is everything after the third one, verbatim, so it may contain
the separator itself.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Iterable, Optional

FIELD_SEPARATOR = "|"
TAG_SEPARATOR = ","
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"

SCORE_MIN = -128
SCORE_MAX = 127

_PADDED_SEPARATOR = f" {FIELD_SEPARATOR} "
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} [+-]\d{4}$")
_SCORE_RE = re.compile(r"^[+-]?[0-9]+$")
_FORBIDDEN_TAG_CHARS = (TAG_SEPARATOR, FIELD_SEPARATOR, "\n", "\r")


class ParseError(ValueError):
    """Base error for a record line that cannot be decoded."""


class MissingDateTimeError(ParseError):
    """Line has no timestamp field."""

    def __init__(self):
        super().__init__("missing date and time")


class InvalidDateTimeError(ParseError):
    """Timestamp field does not match DATETIME_FORMAT."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid date and time '{text}'")


class MissingScoreError(ParseError):
    """Line has no score field."""

    def __init__(self):
        super().__init__("missing score")


class ScoreErrorKind(StrEnum):
    EMPTY = "empty"
    INVALID_DIGIT = "invalid digit"
    POS_OVERFLOW = "too big"
    NEG_OVERFLOW = "too small"


class InvalidScoreError(ParseError):
    """Score field is not an integer in the signed 8-bit range."""

    def __init__(self, text: str, kind: ScoreErrorKind = ScoreErrorKind.INVALID_DIGIT):
        self.text = text
        self.kind = kind
        super().__init__(f"invalid score '{text}': {kind}")


class InvalidTagsError(ParseError):
    """Tags field holds a tag that cannot be stored."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid tags '{text}'")


@dataclass(frozen=True)
class DailyScore:
    """One journal entry: a mood score at a point in time."""

    score: int
    timestamp: datetime
    tags: frozenset[str] = field(default_factory=frozenset)
    comment: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"Score must be an integer, got {self.score!r}")
        if not SCORE_MIN <= self.score <= SCORE_MAX:
            raise ValueError(f"Score must be in [{SCORE_MIN}, {SCORE_MAX}], got {self.score}")

        offset = self.timestamp.utcoffset()
        if offset is None:
            raise ValueError("Timestamp must carry a UTC offset")
        if offset.total_seconds() % 60:
            raise ValueError(f"UTC offset must be whole minutes, got {offset}")
        if self.timestamp.microsecond:
            object.__setattr__(self, "timestamp", self.timestamp.replace(microsecond=0))

        tags = frozenset(self.tags)
        for tag in tags:
            _check_tag(tag)
        object.__setattr__(self, "tags", tags)

        if self.comment is not None and ("\n" in self.comment or "\r" in self.comment):
            raise ValueError("Comment must fit on a single line")

    @classmethod
    def create(
        cls,
        score: int,
        comment: Optional[str] = None,
        tags: Iterable[str] = (),
        now: Optional[datetime] = None,
    ) -> "DailyScore":
        """Build an entry stamped with `now` (defaults to the current local time)."""
        timestamp = now or datetime.now().astimezone()
        return cls(score=score, timestamp=timestamp, tags=frozenset(tags), comment=comment)

    def tags_string(self) -> str:
        return TAG_SEPARATOR.join(sorted(self.tags))

    def has_tags(self, required: frozenset[str]) -> bool:
        """True when every required tag is present on this entry."""
        return required <= self.tags


def encode(entry: DailyScore) -> str:
    """Render an entry as a single line (no trailing newline)."""
    line = _PADDED_SEPARATOR.join(
        [entry.timestamp.strftime(DATETIME_FORMAT), str(entry.score), entry.tags_string()]
    )
    if entry.comment is not None:
        line = f"{line}{_PADDED_SEPARATOR}{entry.comment}"
    return line


def decode(line: str) -> DailyScore:
    """Parse a single line into a DailyScore.

    Raises:
        ParseError: the first field that fails validation, left to right
    """
    fields = line.rstrip("\r\n").split(_PADDED_SEPARATOR, 3)

    timestamp = _parse_datetime(fields[0].strip())
    score = _parse_score(fields[1].strip() if len(fields) > 1 else None)

    tags: frozenset[str] = frozenset()
    if len(fields) > 2:
        tags = _parse_tags(fields[2].strip())

    comment = fields[3] if len(fields) > 3 else None

    return DailyScore(score=score, timestamp=timestamp, tags=tags, comment=comment)


def _parse_datetime(text: str) -> datetime:
    if not text:
        raise MissingDateTimeError()
    if not _DATETIME_RE.match(text):
        raise InvalidDateTimeError(text)
    try:
        return datetime.strptime(text, DATETIME_FORMAT)
    except ValueError as e:
        raise InvalidDateTimeError(text) from e


def _parse_tags(text: str) -> frozenset[str]:
    if not text:
        return frozenset()
    tags = frozenset(tag.strip() for tag in text.split(TAG_SEPARATOR))
    try:
        for tag in tags:
            _check_tag(tag)
    except ValueError as e:
        raise InvalidTagsError(text) from e
    return tags


def _check_tag(tag: str) -> None:
    if any(ch in tag for ch in _FORBIDDEN_TAG_CHARS):
        raise ValueError(f"Tag may not contain separators or line breaks: {tag!r}")
    if tag != tag.strip():
        raise ValueError(f"Tag may not start or end with whitespace: {tag!r}")


def _parse_score(text: Optional[str]) -> int:
    if text is None:
        raise MissingScoreError()
    if not text:
        raise InvalidScoreError(text, ScoreErrorKind.EMPTY)
    if not _SCORE_RE.match(text):
        raise InvalidScoreError(text, ScoreErrorKind.INVALID_DIGIT)

    value = int(text)
    if value > SCORE_MAX:
        raise InvalidScoreError(text, ScoreErrorKind.POS_OVERFLOW)
    if value < SCORE_MIN:
        raise InvalidScoreError(text, ScoreErrorKind.NEG_OVERFLOW)
    return value
