"""Snapshot loading."""

from status_timeline.ingest.loader import load_grouping, load_links

__all__ = ["load_grouping", "load_links"]
