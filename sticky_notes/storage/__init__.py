from .backends import KeyValueStorage, MemoryStorage, JsonFileStorage, QSettingsStorage
from .filesystem import atomic_write_text, write_recovery_copy

__all__ = ["KeyValueStorage",
           "MemoryStorage",
           "JsonFileStorage",
           "QSettingsStorage",
           "atomic_write_text",
           "write_recovery_copy",
           ]
