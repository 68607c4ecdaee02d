"""Utility helpers for codetribute."""

from codetribute.utils.env_utils import ensure_env_file_ignored, update_env_file

__all__ = [
    "ensure_env_file_ignored",
    "update_env_file",
]
