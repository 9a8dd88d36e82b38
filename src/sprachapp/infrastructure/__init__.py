# Infrastructure Package
from .backup import deserialize, export_backup, import_backup, serialize
from .state_store import JsonFileStateStore, load_or_create

__all__ = [
    "serialize",
    "deserialize",
    "export_backup",
    "import_backup",
    "JsonFileStateStore",
    "load_or_create",
]
