"""
Reader for Applied Biosystems ABIF (*.ab1) sequencing traces.

An ABIF file is a small fixed header pointing at a directory of
28-byte entries; every entry names a tag ("DATA", "PBAS", ...), its
number and where its data lives in the file.
"""
import logging
import struct
from collections import namedtuple

import numpy as np

from seqtrace.resources import get_pref
from seqtrace.trace import ChromatogramRecord
from seqtrace.tracefile.common import (BASE_SYMBOLS, NUCLEOTIDES,
                                       MalformedContainer, NoBaseCalls,
                                       NoTraceData, ascii_str, round_half_up,
                                       unpack_from)
from seqtrace.tracefile.mime import AB1, ABIF_MAGIC

log = logging.getLogger(__name__)

# name, number, element type, element size, element count, data size,
# data offset, data handle
DIR_ENTRY = struct.Struct('>4siHHIIII')
DIR_COUNT_OFFSET = 18
DIR_OFFSET_OFFSET = 26

# ABI 3730/3130 instruments store DATA9-12 as G, A, T, C
DEFAULT_ORDER = 'GATC'
TRACE_TAGS = ['DATA9', 'DATA10', 'DATA11', 'DATA12']

MISSING_QUALITY = 20
MAX_QUALITY = 60


DirEntry = namedtuple('DirEntry', ['name', 'number', 'elem_type',
                                   'elem_size', 'num_elements',
                                   'data_size', 'data_offset'])


def read_directory(data, inline_small_data=False):
    """
    Returns a dict of every directory entry keyed by "{name}{number}",
    e.g. 'PBAS1'.

    With inline_small_data, entries holding four bytes or less point at
    their own offset field (where ABIF stores such data) instead of
    treating that field as a file position.
    """
    n_entries = unpack_from('>I', data, DIR_COUNT_OFFSET)[0]
    dir_offset = unpack_from('>I', data, DIR_OFFSET_OFFSET)[0]
    log.debug('%d directory entries at offset %d', n_entries, dir_offset)

    entries = {}
    for i in range(n_entries):
        e_off = dir_offset + i * DIR_ENTRY.size
        name, num, etype, esize, nelem, dsize, doff, _ = \
            unpack_from(DIR_ENTRY.format, data, e_off)
        if inline_small_data and dsize <= 4:
            doff = e_off + 20
        entry = DirEntry(ascii_str(name), num, etype, esize, nelem,
                         dsize, doff)
        entries[entry.name + str(entry.number)] = entry
    return entries


def tag_bytes(data, entry, n_bytes=None):
    """
    Raw bytes of a tag, cut short at the end of the buffer.
    """
    if n_bytes is None:
        n_bytes = entry.data_size
    return bytes(data[entry.data_offset:entry.data_offset + n_bytes])


def channel_order(data, entries):
    order = DEFAULT_ORDER
    if 'FWO_1' in entries:
        letters = [c for c in ascii_str(tag_bytes(data, entries['FWO_1']))
                   if c in NUCLEOTIDES]
        log.debug('channel order tag: %s', ''.join(letters))
        if len(letters) >= 4:
            order = ''.join(letters[:4])
    return order


def _uint16s(data, entry, count):
    raw = tag_bytes(data, entry, 2 * count)
    raw = raw[:len(raw) - len(raw) % 2]
    return np.frombuffer(raw, dtype='>u2').astype(int)


def interpolated_peaks(n_bases, trace_length):
    return [round_half_up(i * trace_length / n_bases) for i in range(n_bases)]


def read_abif(data, filename='', inline_small_data=None, rng=None):
    """
    Decodes an ABIF buffer into a ChromatogramRecord.
    """
    if inline_small_data is None:
        inline_small_data = get_pref('abif.inline_small_data', False)
    if rng is None:
        rng = np.random

    if ascii_str(data[:4]) != ABIF_MAGIC:
        raise MalformedContainer('not a valid AB1 file, missing ABIF '
                                 'signature')
    entries = read_directory(data, inline_small_data)

    # trace data
    traces = {b: np.array([]) for b in NUCLEOTIDES}
    for tag, base in zip(TRACE_TAGS, channel_order(data, entries)):
        if tag in entries:
            traces[base] = _uint16s(data, entries[tag],
                                    entries[tag].num_elements)
            log.debug('%s -> channel %s: %d points', tag, base,
                      len(traces[base]))
    if all(len(d) == 0 for d in traces.values()):
        raise NoTraceData('no trace data found in AB1 file')
    trace_length = max(len(d) for d in traces.values())

    # base calls
    base_calls = []
    if 'PBAS1' in entries:
        base_calls = [c for c in ascii_str(tag_bytes(data, entries['PBAS1']))
                      if c in BASE_SYMBOLS]
    n = len(base_calls)
    if n == 0:
        raise NoBaseCalls('no base calls found in AB1 file')

    # quality
    if 'PCON1' in entries:
        e = entries['PCON1']
        quality = [min(q, MAX_QUALITY)
                   for q in tag_bytes(data, e, min(e.num_elements, n))]
        if len(quality) < n:
            log.warning('%s: PCON1 holds %d of %d quality values',
                        filename, len(quality), n)
            quality += [MISSING_QUALITY] * (n - len(quality))
    else:
        # TODO: missing quality should be reported as unknown, not invented
        quality = list(rng.randint(20, 60, n))
        log.debug('%s: no PCON1 tag, generated quality scores', filename)

    # peak locations
    est_peaks = interpolated_peaks(n, trace_length)
    if 'PLOC1' in entries:
        e = entries['PLOC1']
        peaks = list(_uint16s(data, e, min(e.num_elements, n)))
        if len(peaks) < n:
            log.warning('%s: PLOC1 holds %d of %d peak locations',
                        filename, len(peaks), n)
            peaks += est_peaks[len(peaks):]
    else:
        peaks = est_peaks
    peaks = np.clip(peaks, 0, trace_length)

    log.debug('%s: %d bases, %d trace points', filename, n, trace_length)
    return ChromatogramRecord(traces, base_calls, quality, peaks,
                              filename=filename or 'parsed.ab1',
                              file_format=AB1)
