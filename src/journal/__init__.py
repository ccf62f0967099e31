from .mood_report import MoodPoint, MoodReport
from .record import DailyScore, ParseError, decode, encode
from .storage import JournalError, JournalStorage

__all__ = [
    "DailyScore",
    "ParseError",
    "decode",
    "encode",
    "MoodReport",
    "MoodPoint",
    "JournalStorage",
    "JournalError",
]
