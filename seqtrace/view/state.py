"""
The zoom, scroll and selection state of a chromatogram view.

ViewState is immutable: every function here returns a new state and
leaves the one it was given alone.
"""
from collections import namedtuple

from seqtrace.resources import get_pref
from seqtrace.trace.record import NUCLEOTIDES

MIN_ZOOM, MAX_ZOOM = 0.5, 20.
DEFAULT_ZOOM = 2.5
MAX_QUALITY = 60
DEFAULT_QUALITY_THRESHOLD = 20


def clamp(lo, hi, v):
    return max(lo, min(hi, v))


class ViewState(namedtuple('ViewState', ['zoom', 'scroll', 'selected',
                                         'hovered', 'edited', 'highlight',
                                         'quality_threshold', 'channels'])):
    __slots__ = ()

    @classmethod
    def initial(cls):
        zoom = get_pref('view.zoom', DEFAULT_ZOOM)
        thresh = get_pref('view.quality_threshold',
                          DEFAULT_QUALITY_THRESHOLD)
        return cls(zoom=clamp(MIN_ZOOM, MAX_ZOOM, zoom), scroll=0.,
                   selected=None, hovered=None, edited=frozenset(),
                   highlight=None,
                   quality_threshold=clamp(0, MAX_QUALITY, thresh),
                   channels=frozenset(NUCLEOTIDES))


def zoom_by(state, delta):
    return state._replace(zoom=clamp(MIN_ZOOM, MAX_ZOOM, state.zoom + delta))


def scroll_by(state, delta):
    return state._replace(scroll=clamp(0., 1., state.scroll + delta))


def scroll_to(state, scroll):
    return state._replace(scroll=clamp(0., 1., scroll))


def navigate(state, pixel_x, canvas_width):
    """
    Jump so the view is positioned proportionally to where the canvas
    was (double-)clicked.
    """
    return scroll_to(state, pixel_x / float(canvas_width))


def reset_view(state):
    return state._replace(zoom=DEFAULT_ZOOM, scroll=0., selected=None)


def toggle_channel(state, base):
    if base not in NUCLEOTIDES:
        raise ValueError('unknown channel {!r}'.format(base))
    return state._replace(channels=state.channels ^ {base})


def set_quality_threshold(state, threshold):
    return state._replace(quality_threshold=clamp(0, MAX_QUALITY,
                                                  int(threshold)))
