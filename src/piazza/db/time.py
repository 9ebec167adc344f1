# src/piazza/db/time.py
"""Time utilities for database models.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns; repositories pass them through :func:`as_utc`.
"""

from piazza.domain.clock import as_utc, utcnow

__all__ = ["as_utc", "utcnow"]
