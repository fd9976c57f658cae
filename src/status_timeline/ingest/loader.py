"""Load link snapshots from disk."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from status_timeline.models import Grouping, Link

logger = logging.getLogger(__name__)

_LINKS = TypeAdapter(list[Link])


def load_links(path: Path) -> list[Link]:
    """
    Load a JSON snapshot of links.

    The document is either a list of link objects or an object with a
    "links" list. Each link uses the model's own field names.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix != ".json":
        raise ValueError(f"Unsupported file format: {suffix}")

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("links")
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of links")

    links = _LINKS.validate_python(data)
    logger.info("Loaded %d links from %s", len(links), path)
    return links


def load_grouping(path: Path) -> Grouping:
    """Load a snapshot and group it by entity."""
    return Grouping.from_links(load_links(path))
