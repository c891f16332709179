"""Path canonicalization for index store keys.

Backslash separators become forward slashes. No other rewriting happens:
case, dot segments and repeated slashes are kept as given.
"""

from __future__ import annotations

from core.constants import PATH_SEPARATOR


def normalize_path(path: str) -> str:
    """Return the slash-delimited form of a path.

    Args:
        path: Caller path, possibly using backslashes.

    Returns:
        Path with every backslash replaced by a forward slash.
    """
    return path.replace("\\", PATH_SEPARATOR)
