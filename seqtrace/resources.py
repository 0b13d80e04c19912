import configparser
import os.path as op

# caching function
from functools import lru_cache as cache


_TRUE = {'1', 'yes', 'true', 'on'}


def _read_config():
    cp = configparser.ConfigParser()
    for cfg in (op.expanduser('~/.seqtrace.ini'), './seqtrace.ini'):
        if op.exists(cfg):
            with open(cfg) as f:
                cp.read_file(f)
            break
    return cp


def get_pref(key, dflt=None):
    """
    Look up a preference stored as "section.key" in the user's
    seqtrace.ini. The type of dflt decides how the raw string is
    converted; missing sections or keys return dflt.
    """
    cp = _read_config()
    section, _, name = key.partition('.')
    try:
        val = cp.get(section, name)
    except (configparser.NoSectionError, configparser.NoOptionError):
        return dflt

    if isinstance(dflt, bool):
        return val.strip().lower() in _TRUE
    elif isinstance(dflt, int):
        return int(val)
    elif isinstance(dflt, float):
        return float(val)
    return val
