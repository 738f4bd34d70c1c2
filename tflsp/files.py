"""Handles on documents and directories identified by file URIs."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from urllib.parse import urlparse
from urllib.request import url2pathname


def _is_uri_valid(uri: str) -> bool:
    try:
        parsed = urlparse(uri)
    except ValueError:
        return False
    return parsed.scheme == "file"


def _path_from_uri(uri: str) -> str:
    if not _is_uri_valid(uri):
        raise ValueError(f"invalid file URI: {uri!r}")
    parsed = urlparse(uri)
    return url2pathname(parsed.path)


def _uri_from_path(path: str) -> str:
    return pathlib.Path(os.path.abspath(path)).as_uri()


@dataclass(frozen=True)
class FileHandler:
    """A file or directory identified by its URI."""

    uri: str
    is_dir: bool = False

    def valid(self) -> bool:
        """Whether the URI is a usable file URI."""
        return _is_uri_valid(self.uri)

    def full_path(self) -> str:
        """The local path; raises ValueError for an invalid URI."""
        return _path_from_uri(self.uri)

    def dir(self) -> str:
        """The directory itself, or the directory holding the file."""
        if self.is_dir:
            return self.full_path()
        return os.path.dirname(self.full_path())

    def filename(self) -> str:
        """The last element of the path."""
        return os.path.basename(self.full_path())


@dataclass(frozen=True)
class VersionedFileHandler(FileHandler):
    """A file handler carrying the document version."""

    version: int = 0


def file_handler_from_document_uri(doc_uri: str) -> FileHandler:
    return FileHandler(uri=doc_uri)


def file_handler_from_dir_uri(dir_uri: str) -> FileHandler:
    # Clients differ on trailing separators; normalise to none.
    return FileHandler(uri=dir_uri.removesuffix("/"), is_dir=True)


def file_handler_from_path(path: str) -> FileHandler:
    return FileHandler(uri=_uri_from_path(path))


def file_handler_from_dir_path(dir_path: str) -> FileHandler:
    return FileHandler(uri=_uri_from_path(os.path.normpath(dir_path)), is_dir=True)