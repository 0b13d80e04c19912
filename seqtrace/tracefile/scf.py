"""
Reader for Standard Chromatogram Format (*.scf) sequencing traces.

The header is a fixed block of big-endian integers; the four channels
of samples follow one after another (A, C, G, T) and then a fixed
12-byte record for every base.
"""
import logging
import struct

import numpy as np

from seqtrace.resources import get_pref
from seqtrace.trace import ChromatogramRecord
from seqtrace.trace.math_traces import smooth_channels
from seqtrace.tracefile.common import (BASE_SYMBOLS, InvalidHeader,
                                       NoBaseCalls, NoTraceData,
                                       UnsupportedSampleSize, as_letter,
                                       ascii_str, round_half_up, unpack_from)
from seqtrace.tracefile.mime import SCF

log = logging.getLogger(__name__)

CHANNELS = 'ACGT'
BASE_RECORD = 12
SCF_SMOOTHING = 3

MISSING_QUALITY = 20

PEAK_POLICIES = ('interpolate', 'native')


def read_header(data):
    samples, samples_offset, bases = unpack_from('>III', data, 4)
    bases_offset = unpack_from('>I', data, 24)[0]
    version = ascii_str(data[36:40]).replace('\x00', '')
    sample_size = unpack_from('>I', data, 40)[0]
    return {'samples': samples, 'samples_offset': samples_offset,
            'bases': bases, 'bases_offset': bases_offset,
            'version': version, 'sample_size': sample_size}


def read_samples(data, hdr):
    """
    Returns the raw samples of every channel, cut short at the end of
    the buffer.
    """
    size = hdr['sample_size']
    if size == 1:
        dtype = 'u1'
    elif size == 2:
        dtype = '>u2'
    else:
        raise UnsupportedSampleSize('unsupported sample size: '
                                    '{}'.format(size))

    n = hdr['samples']
    traces = {}
    for k, base in enumerate(CHANNELS):
        st = hdr['samples_offset'] + k * n * size
        raw = bytes(data[st:st + n * size])
        raw = raw[:len(raw) - len(raw) % size]
        traces[base] = np.frombuffer(raw, dtype=dtype).astype(float)
        log.debug('channel %s: %d trace points', base, len(traces[base]))
    return traces


# Each strategy looks at one 12-byte base record and either names
# the base or returns None to defer to the next one.
def call_from_base_byte(rec):
    return as_letter(rec[8])


def call_from_confidence(rec):
    probs = list(rec[4:8])
    if max(probs) == 0:
        return None
    return CHANNELS[probs.index(max(probs))]


def call_from_spare_bytes(rec):
    for byte in rec[9:12]:
        letter = as_letter(byte)
        if letter is not None:
            return letter
    return None


BASE_CALLERS = [call_from_base_byte, call_from_confidence,
                call_from_spare_bytes]


def call_base(rec, callers=None):
    if callers is None:
        callers = BASE_CALLERS
    for caller in callers:
        base = caller(rec)
        if base is not None:
            break
    else:
        base = 'N'
    if base not in BASE_SYMBOLS:
        base = 'N'
    return base


def base_quality(rec):
    max_prob = max(rec[4:8])
    if max_prob == 0:
        return MISSING_QUALITY
    return round_half_up(max_prob / 255. * 60)


def native_peak(rec):
    return struct.unpack('>I', bytes(rec[0:4]))[0]


def read_scf(data, filename='', peak_policy=None):
    """
    Decodes an SCF buffer into a ChromatogramRecord.

    peak_policy 'interpolate' (the default) spaces the peaks evenly over
    the trace and ignores the peak index stored with each base;
    'native' uses the stored index.
    """
    if peak_policy is None:
        peak_policy = get_pref('scf.peak_policy', 'interpolate')
    if peak_policy not in PEAK_POLICIES:
        raise ValueError('unknown peak policy {!r}'.format(peak_policy))

    hdr = read_header(data)
    n_samples, n_bases = hdr['samples'], hdr['bases']
    log.debug('SCF v%s: %d samples, %d bases, sample size %d',
              hdr['version'], n_samples, n_bases, hdr['sample_size'])
    if n_samples == 0 or n_bases == 0:
        raise InvalidHeader('invalid SCF file, no samples or bases found')

    traces = smooth_channels(read_samples(data, hdr), SCF_SMOOTHING)

    base_calls, quality, peaks = [], [], []
    for i in range(n_bases):
        b_off = hdr['bases_offset'] + i * BASE_RECORD
        est_peak = int(np.floor(i / n_bases * n_samples))
        if b_off + BASE_RECORD > len(data):
            log.warning('%s: base %d extends beyond file length, stopping '
                        'at %d bases', filename, i, len(base_calls))
            break
        rec = bytearray(data[b_off:b_off + BASE_RECORD])
        try:
            base, qual = call_base(rec), base_quality(rec)
            if peak_policy == 'native':
                peak = native_peak(rec)
            else:
                peak = est_peak
        except (struct.error, IndexError, ValueError) as e:
            log.warning('%s: error reading base %d: %s', filename, i, e)
            base, qual, peak = 'N', MISSING_QUALITY, est_peak
        base_calls.append(base)
        quality.append(qual)
        peaks.append(peak)

    if all(len(d) == 0 for d in traces.values()):
        raise NoTraceData('no trace data found in SCF file')
    if len(base_calls) == 0:
        raise NoBaseCalls('no base calls found in SCF file')
    trace_length = max(len(d) for d in traces.values())
    peaks = np.clip(peaks, 0, trace_length)

    log.debug('%s: %d bases, %d trace points', filename, len(base_calls),
              n_samples)
    return ChromatogramRecord(traces, base_calls, quality, peaks,
                              filename=filename or 'parsed.scf',
                              file_format=SCF)
