"""Common utilities for projectreview.

The logger module depends on ``projectreview.settings`` and is imported
directly as ``projectreview.common.logger``.
"""

from .config import flatten_config, load_config

__all__ = ["flatten_config", "load_config"]
