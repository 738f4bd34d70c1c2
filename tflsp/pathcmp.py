"""Platform-aware path comparison."""

from os import path as ospath


def path_equals(path1: str, path2: str) -> bool:
    """Compare two paths, ignoring case of the volume name only."""
    path1 = ospath.normpath(path1)
    path2 = ospath.normpath(path2)
    volume1, rest1 = ospath.splitdrive(path1)
    volume2, rest2 = ospath.splitdrive(path2)
    return volume1.casefold() == volume2.casefold() and rest1 == rest2