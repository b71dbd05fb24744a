"""
Settings Module
===============

Namespaced configuration store shared by the Ethereum signup modules.
"""

from .database import (
    SettingsStore, SettingsStoreError, ImmutableConfig, EditableConfig,
    register_defaults, get_defaults
)

__all__ = [
    'SettingsStore', 'SettingsStoreError', 'ImmutableConfig', 'EditableConfig',
    'register_defaults', 'get_defaults'
]
