"""
utility file system operations
"""

from __future__ import annotations

import pathlib


class FileConstraintsError(Exception): ...


def _validate_file_path(
    *,
    path: pathlib.Path,
    must_exist: bool = True,
    is_file: bool = True,
) -> FileConstraintsError | None:
    if must_exist and not path.exists():
        return FileConstraintsError(f'File not found: {path}')

    if is_file and not path.is_file():
        return FileConstraintsError(
            f'Expected a file but got a directory: {path}'
        )

    return None


def normalize_pathname(path: str | pathlib.Path) -> pathlib.Path:
    return pathlib.Path(path).expanduser().resolve()


def read_bytes(pathname: str | pathlib.Path) -> bytes:
    '''
    Read the raw contents of a file, no decoding is done since
    resolv.conf may hold invalid UTF-8 inside comments.

    Parameters
    ----------
    pathname : str | pathlib.Path

    Returns
    -------
    bytes

    Raises
    ------
    err
        _Invalid file name or file does not exist_
    '''
    norm_path = normalize_pathname(pathname)
    if err := _validate_file_path(path=norm_path):
        raise err

    return norm_path.read_bytes()
