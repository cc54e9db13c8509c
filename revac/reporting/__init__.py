"""Reporting exports."""

from .summary import best_so_far, load_progress, summarize_progress

__all__ = ["best_so_far", "load_progress", "summarize_progress"]
