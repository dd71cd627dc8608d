from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryConfig:
    """
    Defaults shared by the directory listing and the homepage sections.
    """

    default_price_range: tuple[int, int] = (500, 5000)
    featured_limit: int = 3


DEFAULT_DIRECTORY_CONFIG = DirectoryConfig()
