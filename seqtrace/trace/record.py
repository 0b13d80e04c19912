import os.path as op
from collections import Counter

import numpy as np


NUCLEOTIDES = 'ATGC'
BASE_SYMBOLS = 'ATGCN'


class ChromatogramRecord(object):
    """
    The decoded contents of one sequencing trace: four channels of
    intensity samples plus a base call, quality score and peak position
    for every base.
    """
    def __init__(self, traces, base_calls, quality, peak_locations,
                 filename='', file_format=''):
        self.traces = {b: np.asarray(traces.get(b, []), dtype=float)
                       for b in NUCLEOTIDES}
        self.base_calls = list(base_calls)
        self.quality = np.asarray(quality, dtype=int)
        self.peak_locations = np.asarray(peak_locations, dtype=int)
        self.filename = filename
        self.file_format = file_format

        n = len(self.base_calls)
        if not len(self.quality) == len(self.peak_locations) == n:
            raise ValueError('{} base calls but {} quality scores and {} '
                             'peak locations'.format(n, len(self.quality),
                                                     len(self.peak_locations)))

    @property
    def sequence(self):
        return ''.join(self.base_calls)

    @property
    def sequence_length(self):
        return len(self.base_calls)

    @property
    def trace_length(self):
        return max(len(d) for d in self.traces.values())

    def __len__(self):
        return self.sequence_length

    def copy(self):
        return ChromatogramRecord({b: d.copy() for b, d in self.traces.items()},
                                  list(self.base_calls), self.quality.copy(),
                                  self.peak_locations.copy(),
                                  self.filename, self.file_format)

    def edit_base(self, index, symbol):
        """
        Replaces the base call at index; quality and peak location
        for that base are kept.
        """
        symbol = symbol.upper()
        if symbol not in BASE_SYMBOLS or len(symbol) != 1:
            raise ValueError('{!r} is not one of {}'.format(symbol,
                                                          BASE_SYMBOLS))
        if not 0 <= index < self.sequence_length:
            raise IndexError('base {} out of range'.format(index))
        self.base_calls[index] = symbol

    def subsequence(self, start, end):
        """
        Bases start through end, counted from 1 and inclusive.
        """
        return ''.join(self.base_calls[start - 1:end])

    def high_quality(self, threshold):
        return int(np.sum(self.quality >= threshold))

    def base_counts(self):
        counts = Counter(self.base_calls)
        return {b: counts.get(b, 0) for b in BASE_SYMBOLS}

    @property
    def info(self):
        if self.sequence_length > 0:
            mean_q = float(np.mean(self.quality))
        else:
            mean_q = None
        return {'filename': self.filename,
                'filetype': self.file_format,
                'length': self.sequence_length,
                'trace_length': self.trace_length,
                'bases': self.base_counts(),
                'mean_quality': mean_q}

    def fasta(self):
        return '>{}\n{}'.format(self.filename, self.sequence)

    def export_name(self):
        stem = op.splitext(op.basename(self.filename))[0] or 'sequence'
        return stem + '.fasta'
