"""Framework detection used to seed a new architect.json."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class Framework(str, Enum):
    NESTJS = "NestJS"
    REACT = "React"
    ANGULAR = "Angular"
    EXPRESS = "Express"
    UNKNOWN = "Unknown"


# First match wins: NestJS projects usually depend on express too.
_FRAMEWORK_MARKERS: tuple[tuple[str, Framework], ...] = (
    ("@nestjs/core", Framework.NESTJS),
    ("@angular/core", Framework.ANGULAR),
    ("react", Framework.REACT),
    ("express", Framework.EXPRESS),
)

_LOC_SUGGESTIONS = {
    Framework.NESTJS: 40,
    Framework.ANGULAR: 40,
    Framework.EXPRESS: 30,
    Framework.REACT: 20,
    Framework.UNKNOWN: 30,
}


def detect_framework(root: Path) -> Framework:
    """Guess the project framework from package.json dependencies."""
    package_json = root / "package.json"
    if not package_json.is_file():
        return Framework.UNKNOWN

    try:
        data = orjson.loads(package_json.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", package_json, exc)
        return Framework.UNKNOWN

    if not isinstance(data, dict):
        return Framework.UNKNOWN

    dependencies: set[str] = set()
    for section in ("dependencies", "devDependencies"):
        entries = data.get(section)
        if isinstance(entries, dict):
            dependencies.update(entries)

    for marker, framework in _FRAMEWORK_MARKERS:
        if marker in dependencies:
            return framework
    return Framework.UNKNOWN


def suggested_max_lines(framework: Framework) -> int:
    return _LOC_SUGGESTIONS[framework]


__all__ = ["Framework", "detect_framework", "suggested_max_lines"]
