"""DOVETAIL Python package.

Calendar conflict detection, alternative-slot search and day-view layout.

Public API:
  - import from `dovetail.api` (preferred) or `import dovetail` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
