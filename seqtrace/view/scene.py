"""
Geometry for drawing a chromatogram: everything is in canvas pixels
and the caller decides how to actually paint it.
"""
from collections import namedtuple

import numpy as np

from seqtrace.view.state import MAX_QUALITY
from seqtrace.view.viewport import ViewportMapper

COLORS = {'A': '#00AA00', 'T': '#FF0000', 'G': '#000000', 'C': '#0000FF'}

CANVAS_HEIGHT = 200
TRACE_HEIGHT = 120
BASELINE_Y = 170
QUALITY_BAR_HEIGHT = 12

BaseLabel = namedtuple('BaseLabel', ['index', 'x', 'base', 'selected',
                                     'hovered', 'edited', 'ambiguous'])
QualityBar = namedtuple('QualityBar', ['index', 'x', 'y', 'height',
                                       'passes'])
Marker = namedtuple('Marker', ['x', 'position'])
Scene = namedtuple('Scene', ['width', 'height', 'polylines', 'labels',
                             'quality_bars', 'markers', 'highlight',
                             'selected_x', 'hovered_x', 'threshold_y'])


def marker_interval(zoom):
    if zoom > 10:
        return 10
    elif zoom > 5:
        return 25
    return 50


def _on_canvas(x, width):
    return x is not None and 0 <= x <= width


def build_scene(record, state, canvas_width=None, canvas_height=None):
    """
    Lays out a record as seen through state.

    Returns a Scene whose polylines map each visible channel to an
    (n, 2) array of points, with trace heights scaled to the tallest
    sample anywhere on screen.
    """
    if canvas_height is None:
        canvas_height = CANVAS_HEIGHT
    mapper = ViewportMapper.for_record(record, state, canvas_width)
    width = mapper.canvas_width
    thresh_y = BASELINE_Y + 20 + \
        state.quality_threshold / float(MAX_QUALITY) * QUALITY_BAR_HEIGHT

    if record.trace_length == 0 or mapper.empty:
        return Scene(width, canvas_height, {}, [], [], [], None, None,
                     None, thresh_y)
    st, en = mapper.start, mapper.end

    max_val = max([np.max(d[st:en]) for d in record.traces.values()
                   if len(d[st:en]) > 0] + [0])
    if max_val <= 0:
        max_val = 1.

    polylines = {}
    for base, d in sorted(record.traces.items()):
        if base not in state.channels or len(d) == 0:
            continue
        idx = np.arange(st, min(en, len(d)))
        y = BASELINE_Y - d[idx] / max_val * TRACE_HEIGHT
        polylines[base] = np.column_stack([mapper.to_pixel_x(idx), y])

    peaks = record.peak_locations
    xs = mapper.to_pixel_x(peaks)
    labels, bars = [], []
    for i in np.flatnonzero(mapper.contains(peaks)):
        i, x = int(i), float(xs[i])
        base, q = record.base_calls[i], int(record.quality[i])
        labels.append(BaseLabel(i, x, base, state.selected == i,
                                state.hovered == i, i in state.edited,
                                base == 'N'))
        h = q / float(MAX_QUALITY) * QUALITY_BAR_HEIGHT
        bars.append(QualityBar(i, x, BASELINE_Y + 5, h,
                               q >= state.quality_threshold))

    markers = []
    for pos in range(0, record.sequence_length,
                     marker_interval(state.zoom)):
        x = float(xs[pos])
        if mapper.contains(peaks[pos]) and _on_canvas(x, width):
            markers.append(Marker(x, pos + 1))

    n = record.sequence_length
    selected_x = hovered_x = None
    if state.selected is not None and 0 <= state.selected < n:
        x = float(xs[state.selected])
        selected_x = x if _on_canvas(x, width) else None
    if state.hovered is not None and state.hovered != state.selected \
            and 0 <= state.hovered < n:
        x = float(xs[state.hovered])
        hovered_x = x if _on_canvas(x, width) else None

    highlight = None
    if state.highlight is not None:
        p0 = peaks[state.highlight[0] - 1]
        p1 = peaks[state.highlight[1] - 1]
        if p1 >= st and p0 <= en:
            highlight = (max(0., float(xs[state.highlight[0] - 1])),
                         min(float(width), float(xs[state.highlight[1] - 1])))

    return Scene(width, canvas_height, polylines, labels, bars, markers,
                 highlight, selected_x, hovered_x, thresh_y)
