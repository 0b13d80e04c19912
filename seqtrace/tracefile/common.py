"""
Errors raised while reading trace files and small helpers for pulling
big-endian values out of a byte buffer.
"""
import struct

from seqtrace.trace.record import BASE_SYMBOLS, NUCLEOTIDES  # NOQA


class TraceFileError(Exception):
    """Base class for anything that stops a trace file from being read."""


class TooSmall(TraceFileError):
    pass


class UnknownFormat(TraceFileError):
    pass


class MalformedContainer(TraceFileError):
    pass


class NoTraceData(TraceFileError):
    pass


class NoBaseCalls(TraceFileError):
    pass


class UnsupportedSampleSize(TraceFileError):
    pass


class InvalidHeader(TraceFileError):
    pass


def unpack_from(fmt, data, offset):
    """
    struct.unpack_from that reports running off the end of the
    buffer as a MalformedContainer.
    """
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error:
        raise MalformedContainer('cannot read {} at offset {} of a {}-byte '
                                 'buffer'.format(fmt, offset, len(data)))


def ascii_str(data):
    return bytes(data).decode('ascii', errors='replace')


def as_letter(byte):
    """
    Returns the uppercased ASCII letter for byte, or None.
    """
    if 65 <= byte <= 90 or 97 <= byte <= 122:
        return chr(byte).upper()
    return None


def round_half_up(x):
    return int(x + 0.5)
