"""
Functions which mathematically manipulate trace channels.
"""
import numpy as np
import scipy.ndimage
from seqtrace.resources import cache
from seqtrace.trace.peak_models import gaussian


@cache(maxsize=32)
def smoothing_weights(window):
    """
    Normalized Gaussian weights for a centered window of the given size;
    the standard deviation is a quarter of the window width.
    """
    half = int(window) // 2
    m = gaussian(np.arange(-half, half + 1), w=half / 2.)
    m = m / m.sum()
    m.setflags(write=False)
    return m


def smooth(arr, window):
    """
    Gaussian-weighted moving average of a trace channel.

    Points closer than half a window to either edge are left untouched,
    so the output always has the same length as the input.
    """
    arr = np.asarray(arr, dtype=float)
    half = int(window) // 2
    out = arr.copy()
    if half == 0 or len(arr) <= 2 * half:
        return out

    m = smoothing_weights(int(window))
    smoothed = scipy.ndimage.convolve1d(arr, m, axis=0, mode='reflect')
    out[half:-half] = smoothed[half:-half]
    return out


def smooth_channels(traces, window):
    return {base: smooth(d, window) for base, d in traces.items()}
