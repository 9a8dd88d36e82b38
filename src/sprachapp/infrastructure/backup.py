"""
Backup codec: serializes the whole AppData to the persisted JSON document.

The wire shape uses the camelCase keys of the persisted document
(`cards`, `profile`, `achievements`, `dailyStatsByLang`). Validation is done
by pydantic models; any parse or shape error surfaces as MalformedBackup.
"""

import logging
import re
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from sprachapp.consts import BACKUP_PREFIX, BACKUP_SCHEMA
from sprachapp.domain.constants import EASE_MAX, EASE_MIN
from sprachapp.domain.errors import MalformedBackup
from sprachapp.domain.models import (
    Achievement,
    AppData,
    Card,
    CardKind,
    DailyStat,
    Lang,
    Level,
    Profile,
)

logger = logging.getLogger(__name__)

DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_day_key(v: str) -> str:
    if not DAY_KEY_RE.match(v):
        raise ValueError(f"not an ISO date: {v!r}")
    date.fromisoformat(v)
    return v


class _Doc(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CardDoc(_Doc):
    id: str = Field(min_length=1)
    target_lang: Lang
    kind: CardKind
    front: str
    back: str
    example: str | None = None
    example_translation: str | None = None
    due: int
    interval_days: float = Field(ge=0)
    ease: float = Field(ge=EASE_MIN, le=EASE_MAX)
    lapses: int = Field(ge=0)
    last_reviewed: int | None = None

    def to_domain(self) -> Card:
        return Card(**self.model_dump())


class DailyStatDoc(_Doc):
    reviewed: int = Field(ge=0)
    correct: int = Field(ge=0)
    wrong: int | None = Field(default=None, ge=0)
    minutes: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def derive_wrong(self) -> "DailyStatDoc":
        if self.correct > self.reviewed:
            raise ValueError("correct exceeds reviewed")
        # Older documents left `wrong` absent or stuck at 0; rebuild it from the
        # other counters. Any other mismatch is corrupt.
        if not self.wrong:
            self.wrong = self.reviewed - self.correct
        elif self.correct + self.wrong != self.reviewed:
            raise ValueError("correct and wrong do not add up to reviewed")
        return self

    def to_domain(self) -> DailyStat:
        return DailyStat(**self.model_dump())


class ProfileDoc(_Doc):
    username: str
    native_lang: Literal["DE"] = "DE"
    target_lang: Lang
    level: Level
    daily_goal: int = Field(ge=0)
    xp: int = Field(ge=0)
    streak: int = Field(ge=0)
    best_streak: int = Field(ge=0)
    last_active_day: str
    created_at: int

    @field_validator("last_active_day")
    @classmethod
    def day_key(cls, v: str) -> str:
        return _check_day_key(v)

    def to_domain(self) -> Profile:
        return Profile(**self.model_dump())


class AchievementDoc(_Doc):
    id: str
    title: str
    desc: str
    icon: str
    unlocked_at: int | None = None

    def to_domain(self) -> Achievement:
        return Achievement(**self.model_dump())


class BackupDoc(_Doc):
    """The persisted document, optionally tagged with a schema id and export date."""

    schema_id: str | None = Field(default=None, alias="schema")
    exported_at: str | None = None
    cards: list[CardDoc]
    profile: ProfileDoc
    achievements: list[AchievementDoc]
    daily_stats_by_lang: dict[Lang, dict[str, DailyStatDoc]]

    @field_validator("schema_id")
    @classmethod
    def known_schema(cls, v: str | None) -> str | None:
        if v is not None and v != BACKUP_SCHEMA:
            raise ValueError(f"unsupported schema {v!r}, expected {BACKUP_SCHEMA!r}")
        return v

    @field_validator("daily_stats_by_lang")
    @classmethod
    def day_keys(cls, v: dict[Lang, dict[str, Any]]) -> dict[Lang, dict[str, Any]]:
        for days in v.values():
            for key in days:
                _check_day_key(key)
        return v

    @classmethod
    def from_domain(cls, data: AppData, exported_on: date | None = None) -> "BackupDoc":
        return cls.model_validate(
            {
                "schema_id": BACKUP_SCHEMA,
                "exported_at": exported_on.isoformat() if exported_on else None,
                **asdict(data),
            }
        )

    def to_domain(self) -> AppData:
        stats: dict[Lang, dict[str, DailyStat]] = {lang: {} for lang in Lang}
        for lang, days in self.daily_stats_by_lang.items():
            stats[lang] = {key: stat.to_domain() for key, stat in days.items()}

        return AppData(
            profile=self.profile.to_domain(),
            cards=tuple(c.to_domain() for c in self.cards),
            achievements=tuple(a.to_domain() for a in self.achievements),
            daily_stats_by_lang=stats,
        )


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors()[:3]:
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    more = error.error_count() - len(parts)
    if more > 0:
        parts.append(f"... and {more} more")
    return "; ".join(parts)


def serialize(data: AppData, exported_on: date | None = None) -> bytes:
    """Encode the whole state as a UTF-8 JSON document."""
    doc = BackupDoc.from_domain(data, exported_on)
    return doc.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def deserialize(blob: bytes | str, source: str | None = None) -> AppData:
    """
    Decode and validate a persisted document.

    Raises:
        MalformedBackup: If the blob is not JSON or does not have the expected shape.
    """
    try:
        doc = BackupDoc.model_validate_json(blob)
    except ValidationError as e:
        raise MalformedBackup(_describe(e), source=source) from e
    return doc.to_domain()


# ---------- Backup files ----------


def backup_filename(today: date) -> str:
    return f"{BACKUP_PREFIX}{today.isoformat()}.json"


def export_backup(data: AppData, dest_dir: Path, today: date) -> Path:
    """Write a backup file into `dest_dir` and return its path."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    path = dest_dir / backup_filename(today)
    path.write_bytes(serialize(data, exported_on=today))
    logger.info(f"Exported backup to {path}")
    return path


def import_backup(path: Path) -> AppData:
    """
    Read and validate a backup file.

    Raises:
        MalformedBackup: If the file cannot be read or is not a valid backup.
    """
    try:
        blob = path.read_bytes()
    except OSError as e:
        raise MalformedBackup(f"cannot read file ({e.strerror})", source=str(path)) from e
    data = deserialize(blob, source=str(path))
    logger.info(f"Imported backup from {path}: {len(data.cards)} cards")
    return data
