"""Source file discovery for architect-linter."""

from scan.files import EXCLUDED_DIRS, SOURCE_EXTENSIONS, find_source_files

__all__ = ["EXCLUDED_DIRS", "SOURCE_EXTENSIONS", "find_source_files"]
