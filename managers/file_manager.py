"""
File Manager
============

Manages file system operations.
Follows SRP: Only handles input resolution, path handling and source links.
"""

import glob
import os
from typing import Dict, List, Optional


def trim_file_path(path: str) -> str:
    """
    Make a path relative to the current working directory.

    Args:
        path: Absolute or relative path as printed by a validator

    Returns:
        Path relative to cwd
    """
    return os.path.relpath(path, os.getcwd())


def resolve_files(files: str) -> List[str]:
    """
    Resolve a whitespace separated list of paths and glob patterns.

    Patterns are expanded (sorted); plain paths are kept verbatim, whether
    or not they exist.

    Args:
        files: e.g. "a.xml tei/*.xml"

    Returns:
        List of file paths
    """
    paths: List[str] = []
    for token in (files or "").split():
        if glob.has_magic(token):
            paths.extend(sorted(glob.glob(token)))
        else:
            paths.append(token)
    return paths


class FileManager:
    """
    Manager responsible for file system operations.

    Follows SRP: Only handles file operations.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """
        Initialize file manager.

        Args:
            environ: Environment mapping providing repository context
                (default: os.environ)
        """
        environ = os.environ if environ is None else environ
        self.server_url = environ.get("GITHUB_SERVER_URL") or "https://github.com"
        self.repository = environ.get("GITHUB_REPOSITORY") or ""
        self.sha = environ.get("GITHUB_SHA") or ""

    def resolve_files(self, files: str) -> List[str]:
        return resolve_files(files)

    def trim_file_path(self, path: str) -> str:
        return trim_file_path(path)

    def make_url(self, file_path: str, line: int) -> str:
        """
        Build a link to a line of a file in the repository.

        Args:
            file_path: Path relative to the repository root
            line: 1-based line number (0 links to the file only)

        Returns:
            URL, or an empty string when there is no repository context
        """
        if not self.repository or not self.sha:
            return ""
        path = file_path.replace(os.sep, "/")
        url = f"{self.server_url}/{self.repository}/blob/{self.sha}/{path}"
        if line:
            url += f"#L{line}"
        return url

    def make_link(self, file_path: str, line: int, text: Optional[str] = None) -> str:
        """
        Build an HTML anchor to a line of a file.

        Falls back to the plain text when no URL can be built.
        """
        text = text or file_path
        url = self.make_url(file_path, line)
        if not url:
            return text
        return f'<a href="{url}">{text}</a>'
