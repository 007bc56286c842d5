"""Overrides - sparse per-tenant agent overrides, storage, and merge"""
from .models import ActionOverride, OverrideRecord, SCALAR_FIELDS
from .store import KeyValueOverrideStore, OverrideStore, StorageUnavailableError
from .merge import merge_override

__all__ = [
    "ActionOverride", "OverrideRecord", "SCALAR_FIELDS",
    "KeyValueOverrideStore", "OverrideStore", "StorageUnavailableError",
    "merge_override",
]
