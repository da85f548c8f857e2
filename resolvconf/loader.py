from __future__ import annotations

import pathlib
from typing import Final

from loguru import logger

from resolvconf.config import Config
from resolvconf.core.fs_utils import read_bytes
from resolvconf.grammar import parse

DEFAULT_PATH: Final = '/etc/resolv.conf'


def load(path: str | pathlib.Path = DEFAULT_PATH) -> Config:
    '''
    Reads and parses a resolv.conf file.

    Parameters
    ----------
    path : str | pathlib.Path, optional
        by default '/etc/resolv.conf'

    Returns
    -------
    Config

    Raises
    ------
    FileConstraintsError
        _the path is missing or not a file_
    ParseError
        _the file contents are malformed_
    '''
    data = read_bytes(path)
    logger.debug(f'read {len(data)} bytes from {path}')
    return parse(data)
