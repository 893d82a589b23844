"""Base classes for configuration and state models.

This module holds the foundations shared by config.py and log.py:
- Closeable Protocol for resource cleanup
- BaseCloseable for automatic cleanup cascade
- BaseConfig for configuration sections
- BaseState for runtime state sections

They live apart from config.py so that log.py can depend on them
without a circular import.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

# ============================================================
# CLOSEABLE PROTOCOL AND BASE CLASS
# ============================================================

@runtime_checkable
class Closeable(Protocol):
    """Protocol for objects that support close()."""

    def close(self) -> None:
        """Release resources."""
        ...


class BaseCloseable(BaseModel):
    """Pydantic model that closes its Closeable children.

    Subclasses:
    - work as context managers
    - walk their fields on close() and close every Closeable child
    - keep closing the remaining children when one of them fails

    The resulting cascade is:
    State.__exit__() → Config.close() → Logger.close() → Sink.close()
    """

    def close(self):
        """Close all closeable child objects.

        Errors are reported on stderr; the logger may already be
        gone by the time this runs.
        """
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    msg = f"Warning: Error closing {field_name}: {e}"
                    print(msg, file=sys.stderr)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        """Context manager exit - close all children."""
        self.close()
        return False


# ============================================================
# BASE CLASSES (semantic markers for readers)
# ============================================================

class BaseConfig(BaseCloseable):
    """Base class for configuration sections.

    Marks a model as loaded from YAML/env/CLI rather than
    mutated while the analysis runs.
    """
    pass


class BaseState(BaseCloseable):
    """Base class for runtime state sections.

    Marks a model as mutated by workflow nodes during analysis.
    """
    pass


__all__ = ["Closeable", "BaseCloseable", "BaseConfig", "BaseState"]
