"""Utility modules for Request Logger."""

from .sanitizer import (
    mask_sensitive_data,
    is_sensitive_key,
    add_sensitive_keys,
    remove_sensitive_keys,
)

__all__ = [
    'mask_sensitive_data',
    'is_sensitive_key',
    'add_sensitive_keys',
    'remove_sensitive_keys',
]
