import numpy as np

from seqtrace.view.viewport import ViewportMapper

# clicks further than this from every base select nothing
HIT_RADIUS = 50


class HitTester(object):
    """
    Finds the base whose peak is drawn closest to a canvas position.
    """
    def __init__(self, record, mapper, radius=HIT_RADIUS):
        self.record = record
        self.mapper = mapper
        self.radius = radius

    @classmethod
    def for_state(cls, record, state, canvas_width=None):
        return cls(record, ViewportMapper.for_record(record, state,
                                                     canvas_width))

    def nearest_base(self, pixel_x):
        peaks = self.record.peak_locations
        if self.mapper.empty or len(peaks) == 0:
            return None

        dist = np.abs(pixel_x - self.mapper.to_pixel_x(peaks))
        dist[~self.mapper.contains(peaks)] = np.inf
        idx = int(np.argmin(dist))
        if dist[idx] < self.radius:
            return idx
        return None

    def click(self, state, pixel_x):
        return state._replace(selected=self.nearest_base(pixel_x))

    def hover(self, state, pixel_x):
        return state._replace(hovered=self.nearest_base(pixel_x))


def leave(state):
    return state._replace(hovered=None)
