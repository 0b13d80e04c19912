import binascii
import mimetypes
import os

from seqtrace.tracefile.common import TooSmall, UnknownFormat


AB1 = 'AB1'
SCF = 'SCF'
MOCK = 'MOCK'

SCF_MAGIC = b'\x2e\x73\x63\x66'
ABIF_MAGIC = 'ABIF'

mimes = """
application/vnd-sequencing-ab1	AB1	ab1,abi	41424946
application/vnd-sequencing-scf	SCF	scf	2E736366
"""


def _mime_table():
    ft_fmt, ft_magic, ft_ext = {}, {}, {}
    for line in mimes.strip('\n').split('\n'):
        mime, fmt, ext, magic = line.split()
        ft_fmt[fmt] = mime
        ft_magic[magic] = mime
        for e in ext.split(','):
            ft_ext[e] = mime
    return ft_fmt, ft_magic, ft_ext


def detect_format(data):
    """
    Sniffs the leading bytes of a trace file and returns AB1 or SCF.
    """
    if data is None or len(data) < 4:
        raise TooSmall('need at least 4 bytes to determine the file type')

    head = bytes(data[:4])
    if head == SCF_MAGIC:
        return SCF
    if head.decode('ascii', errors='replace') == ABIF_MAGIC:
        return AB1
    raise UnknownFormat('unknown file format (magic {}), '
                        'not AB1 or SCF'.format(binascii.b2a_hex(head)
                                                .decode('ascii').upper()))


def get_mimetype(filename, magic_all):
    ft_fmt, ft_magic, ft_ext = _mime_table()

    magic = binascii.b2a_hex(bytes(magic_all[:4])).decode('ascii').upper()
    if magic in ft_magic:
        return ft_magic[magic]

    if filename is not None:
        ext = os.path.splitext(filename)[1].lower()[1:]
        if ext in ft_ext:
            return ft_ext[ext]
        return mimetypes.guess_type(filename)[0]
    return None


def format_mimetype(fmt):
    return _mime_table()[0].get(fmt)
