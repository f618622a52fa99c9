"""Core package for bc-checker.

Holds the snapshot integrity pieces (signing, change log, snapshot layout),
the shared contracts and the settings conveniences:
    from bcchecker.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
