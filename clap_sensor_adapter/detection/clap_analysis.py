"""Signal analysis used by the microphone clap provider."""

import numpy as np

INT16_RANGE = 65536


def detect_clap(samples: np.ndarray, previous_sample: int, threshold: int) -> tuple[bool, float]:
    """
    Detect a clap in one frame of mono 16-bit audio.

    A clap is a sharp transient, so the frame is flagged when the largest
    absolute delta between consecutive samples exceeds ``threshold``. The
    last sample of the previous frame is used as the predecessor of the
    first sample.

    Args:
        samples: Frame of int16 samples
        previous_sample: Last sample of the previous frame
        threshold: Minimum delta, in int16 units, that counts as a clap

    Returns:
        (clap detected, largest delta normalised to 0.0-1.0)
    """
    if samples.size == 0:
        return False, 0.0

    # widen before subtracting, int16 deltas overflow
    widened = samples.astype(np.int32)
    shifted = np.roll(widened, 1)
    shifted[0] = previous_sample
    delta = int(np.max(np.abs(widened - shifted)))

    return delta > threshold, min(delta / INT16_RANGE, 1.0)


def threshold_from_fraction(fraction: float) -> int:
    """Convert a 0.0-1.0 sensitivity threshold into int16 delta units."""
    return int(INT16_RANGE * fraction)
