import numpy as np

from seqtrace.resources import get_pref

DEFAULT_CANVAS_WIDTH = 1200


def canvas_width_pref():
    return get_pref('view.canvas_width', DEFAULT_CANVAS_WIDTH)


class ViewportMapper(object):
    """
    Works out which trace samples are on screen for a zoom and scroll
    position and converts between sample indices and canvas pixels.

    zoom is the number of pixels drawn per trace sample, so the canvas
    shows canvas_width / zoom samples; scroll runs from 0 (start of the
    trace) to 1 (end of the trace).
    """
    def __init__(self, trace_length, zoom, scroll, canvas_width=None):
        if canvas_width is None:
            canvas_width = canvas_width_pref()
        self.canvas_width = canvas_width
        self.trace_length = trace_length

        self.visible = int(np.floor(canvas_width / float(zoom)))
        start = int(np.floor(scroll * max(0, trace_length - self.visible)))
        end = min(start + self.visible, trace_length)
        self.start = max(0, min(start, trace_length))
        self.end = max(0, min(end, trace_length))

    @classmethod
    def for_record(cls, record, state, canvas_width=None):
        return cls(record.trace_length, state.zoom, state.scroll,
                   canvas_width)

    @property
    def empty(self):
        return self.end == self.start

    def contains(self, idx):
        return np.logical_and(idx >= self.start, idx <= self.end)

    def to_pixel_x(self, idx):
        """
        Canvas x coordinate of a trace index (or an array of them);
        None when no samples are on screen.
        """
        if self.empty:
            return None
        idx = np.asarray(idx, dtype=float)
        return (idx - self.start) / (self.end - self.start) * \
            self.canvas_width

    def from_pixel_x(self, px):
        if self.empty:
            return None
        return self.start + px / float(self.canvas_width) * \
            (self.end - self.start)

    def visible_bases(self, n_bases):
        """
        The first and last base on screen, counted from 1, estimated
        from the base spacing over the whole trace.
        """
        if self.trace_length == 0 or n_bases == 0:
            return 0, 0
        st = self.start * n_bases // self.trace_length
        en = self.end * n_bases // self.trace_length
        return st + 1, min(en, n_bases)
