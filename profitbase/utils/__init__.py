"""Utility functions for profitbase."""

from profitbase.utils.env import load_env_file_if_present, load_setting

__all__ = ["load_env_file_if_present", "load_setting"]
