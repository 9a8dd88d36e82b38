# Domain Package
from .errors import CardNotFoundError, MalformedBackup, PackUnavailable, SprachAppError
from .models import (
    Achievement,
    AppData,
    Card,
    CardKind,
    DailyStat,
    Lang,
    Level,
    PackContent,
    PackEntry,
    Profile,
)
from .ports import PackSource, StateStore

__all__ = [
    "Achievement",
    "AppData",
    "Card",
    "CardKind",
    "DailyStat",
    "Lang",
    "Level",
    "PackContent",
    "PackEntry",
    "Profile",
    "PackSource",
    "StateStore",
    "SprachAppError",
    "MalformedBackup",
    "CardNotFoundError",
    "PackUnavailable",
]
