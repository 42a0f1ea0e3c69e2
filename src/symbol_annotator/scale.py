"""Scale ratio between a page's native resolution and the classifier's.

The ratio is ``expected_interline / actual_interline``.  The image sent to
the classifier is scaled by the ratio and every returned coordinate is
divided by that very same value.
"""

from __future__ import annotations

import math


def resolve_ratio(actual_interline: float, expected_interline: float) -> float:
    """Ratio applied to the page image before classification.

    Args:
        actual_interline: Measured interline of the page, in pixels.
        expected_interline: Interline the classifier was trained on, in pixels.

    Returns:
        ``expected_interline / actual_interline``.

    Raises:
        ValueError: If either interline is not strictly positive.
    """
    if actual_interline <= 0:
        raise ValueError(f"Page interline must be positive, got {actual_interline}")
    if expected_interline <= 0:
        raise ValueError(
            f"Expected interline must be positive, got {expected_interline}"
        )
    return expected_interline / actual_interline


def scaled_size(width: int, height: int, ratio: float) -> tuple[int, int]:
    """Dimensions of an image scaled by ``ratio``, rounded up."""
    return math.ceil(width * ratio), math.ceil(height * ratio)


def to_classifier_space(value: float, ratio: float) -> float:
    return value * ratio


def to_page_space(value: float, ratio: float) -> float:
    return value / ratio
