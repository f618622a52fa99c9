"""Pipeline entry points for bc-checker.

Currently exposed:

- :func:`check_backward_compatibility`: the snapshot check run, implemented
  in ``check.py``.
"""

from __future__ import annotations

from .check import check_backward_compatibility

__all__ = ["check_backward_compatibility"]
