"""
Synthesizes a plausible-looking chromatogram for when there is no file
to read, or the file could not be read.
"""
import numpy as np

from seqtrace.trace import ChromatogramRecord
from seqtrace.trace.math_traces import smooth_channels
from seqtrace.trace.peak_models import gaussian
from seqtrace.tracefile.common import NUCLEOTIDES
from seqtrace.tracefile.mime import MOCK

MOCK_LENGTH = 800
SAMPLES_PER_BASE = 4
PEAK_WIDTH = 2
PEAK_HEIGHTS = {'A': 100, 'T': 80, 'G': 120, 'C': 90}
MOCK_SMOOTHING = 9


def mock_chromatogram(filename='', length=MOCK_LENGTH, seed=None):
    """
    Generates a random sequence and a trace with a gaussian peak in the
    matching channel under every base.
    """
    rng = np.random.RandomState(seed)
    seq = rng.choice(list(NUCLEOTIDES), length)

    x = np.arange(length * SAMPLES_PER_BASE)
    base_idx = x // SAMPLES_PER_BASE
    centers = base_idx * SAMPLES_PER_BASE + SAMPLES_PER_BASE // 2
    near_peak = np.abs(x - centers) < 2 * PEAK_WIDTH
    jitter = rng.uniform(-25, 25, len(x))

    traces = {}
    for base in NUCLEOTIDES:
        peak = gaussian(x, x=centers, w=PEAK_WIDTH, h=PEAK_HEIGHTS[base])
        background = rng.uniform(0, 15, len(x))
        in_peak = np.logical_and(seq[base_idx] == base, near_peak)
        traces[base] = np.where(in_peak, peak, background) + jitter
    traces = smooth_channels(traces, MOCK_SMOOTHING)

    # read quality drifts down along the read, as on a real instrument
    i = np.arange(length)
    quality = np.clip(40 + rng.uniform(-10, 10, length) - 0.05 * i, 10, 60)
    quality = np.floor(quality + 0.5).astype(int)

    peaks = i * SAMPLES_PER_BASE + SAMPLES_PER_BASE // 2
    return ChromatogramRecord(traces, [str(b) for b in seq], quality, peaks,
                              filename=filename or 'unknown.ab1',
                              file_format=MOCK)
