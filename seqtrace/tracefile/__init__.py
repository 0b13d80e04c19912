'''
Functions that turn the raw bytes of a sequencing trace file into a
ChromatogramRecord.
'''
import logging
import os.path as op
from collections import namedtuple

from seqtrace.resources import cache, get_pref
from seqtrace.tracefile.common import TraceFileError
from seqtrace.tracefile.mime import AB1, SCF, detect_format
from seqtrace.tracefile.mock import mock_chromatogram

log = logging.getLogger(__name__)

# anything shorter than this can't be a real trace file
MIN_FILE_SIZE = 100

ParseResult = namedtuple('ParseResult', ['record', 'error'])


@cache(maxsize=1)
def readers():
    """
    A mapping of file formats to the function that reads them.
    """
    from seqtrace.tracefile.abif import read_abif
    from seqtrace.tracefile.scf import read_scf
    return {AB1: read_abif, SCF: read_scf}


def parse(data, filename=''):
    """
    Reads data as an AB1 or SCF file. Returns a ParseResult holding
    either the record or the TraceFileError that stopped it.
    """
    try:
        fmt = detect_format(data)
        log.debug('%s: detected file type %s', filename, fmt)
        return ParseResult(readers()[fmt](data, filename), None)
    except TraceFileError as e:
        return ParseResult(None, e)


def load(data, filename='', fallback=None, seed=None):
    """
    Returns a displayable ChromatogramRecord for data.

    Missing or tiny input, and any file that can't be read, produce a
    mock chromatogram instead. With fallback False every input is parsed
    and a TraceFileError is raised for anything unreadable. seed only
    affects the mock.
    """
    if fallback is None:
        fallback = get_pref('load.fallback', True)

    if fallback and (data is None or len(data) < MIN_FILE_SIZE):
        log.info('%s: no usable file data, using mock data', filename)
        return mock_chromatogram(filename, seed=seed)

    result = parse(data, filename)
    if result.error is None:
        return result.record
    if not fallback:
        raise result.error
    log.warning('%s: failed to parse file data, falling back to mock: %s',
                filename, result.error)
    return mock_chromatogram(filename, seed=seed)


def read_file(filename, fallback=None):
    with open(filename, 'rb') as f:
        data = f.read()
    return load(data, op.basename(filename), fallback=fallback)
