"""
Managers Package
================

Coordination layer for the XML validation step.

Managers:
- FileManager: Input resolution, path trimming and source links
"""

from .file_manager import FileManager, resolve_files, trim_file_path

__all__ = [
    'FileManager',
    'resolve_files',
    'trim_file_path',
]
