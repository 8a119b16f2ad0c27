"""View/subscriber ratio buckets.

Each bucket is a half-open interval ``[lower, upper)``; bucket 5 has no upper
bound. The bounds are compared as-is, never rounded.
"""

import math
from collections.abc import Iterable

BUCKET_BOUNDS: dict[int, tuple[float, float | None]] = {
    1: (0.0, 0.2),
    2: (0.2, 0.6),
    3: (0.6, 1.4),
    4: (1.4, 3.0),
    5: (3.0, None),
}


def classify(ratio: float) -> int:
    """Return the bucket (1-5) a view/subscriber ratio falls in.

    NaN has no position on the scale and lands in bucket 1.
    """
    if math.isnan(ratio) or ratio < 0.2:
        return 1
    if ratio < 0.6:
        return 2
    if ratio < 1.4:
        return 3
    if ratio < 3.0:
        return 4
    return 5


def in_buckets(ratio: float, buckets: Iterable[int]) -> bool:
    """True if ``ratio`` falls in any of ``buckets``."""
    return classify(ratio) in set(buckets)
