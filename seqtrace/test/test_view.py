import numpy as np
import pytest

from seqtrace.trace import ChromatogramRecord
from seqtrace.view.hittest import HitTester, leave
from seqtrace.view.scene import build_scene, marker_interval
from seqtrace.view.selection import (RangeError, SelectionEditModel,
                                     SelectionError, clear_selection, edit,
                                     highlighted_sequence, select,
                                     set_highlight)
from seqtrace.view.state import (ViewState, navigate, reset_view, scroll_by,
                                 scroll_to, set_quality_threshold,
                                 toggle_channel, zoom_by)
from seqtrace.view.viewport import ViewportMapper


def make_record(peaks, length=1200):
    t = np.arange(length)
    traces = {b: 50 + 40 * np.sin(t / (5. + k))
              for k, b in enumerate('ATGC')}
    bases = ['ACGT'[i % 4] for i in range(len(peaks))]
    quality = [10 + 10 * (i % 5) for i in range(len(peaks))]
    return ChromatogramRecord(traces, bases, quality, peaks,
                              filename='view.ab1', file_format='AB1')


def unzoomed():
    return ViewState.initial()._replace(zoom=1., scroll=0.)


def test_view_state_transitions():
    s = ViewState.initial()._replace(zoom=2.5)
    assert zoom_by(s, 100).zoom == 20
    assert zoom_by(s, -100).zoom == 0.5
    assert zoom_by(s, 0.5).zoom == 3.
    assert scroll_by(s, -1).scroll == 0
    assert scroll_by(scroll_to(s, 0.95), 0.1).scroll == 1
    assert navigate(s, 300, 1200).scroll == 0.25
    assert set_quality_threshold(s, 99).quality_threshold == 60
    assert set_quality_threshold(s, -5).quality_threshold == 0

    s2 = toggle_channel(s, 'T')
    assert 'T' not in s2.channels
    assert 'T' in s.channels
    assert toggle_channel(s2, 'T').channels == s.channels
    with pytest.raises(ValueError):
        toggle_channel(s, 'X')

    s3 = reset_view(select(zoom_by(scroll_to(s, 0.7), 4), 3))
    assert (s3.zoom, s3.scroll, s3.selected) == (2.5, 0, None)


def test_viewport_window():
    vp = ViewportMapper(3000, zoom=2, scroll=0.5, canvas_width=1200)
    assert vp.visible == 600
    assert (vp.start, vp.end) == (1200, 1800)
    assert vp.to_pixel_x(1500) == 600
    assert vp.from_pixel_x(600) == 1500
    assert vp.visible_bases(300) == (121, 180)

    vp = ViewportMapper(100, zoom=1, scroll=1, canvas_width=1200)
    assert (vp.start, vp.end) == (0, 100)

    vp = ViewportMapper(0, zoom=1, scroll=0.5, canvas_width=1200)
    assert vp.empty
    assert vp.to_pixel_x(0) is None


def test_viewport_bounds():
    for length in (0, 1, 100, 2399, 5000):
        for zoom in np.linspace(0.5, 20, 40):
            for scroll in np.linspace(0, 1, 11):
                vp = ViewportMapper(length, zoom, scroll, canvas_width=1200)
                assert 0 <= vp.start <= vp.end <= length


def test_nearest_base():
    rec = make_record([100])
    ht = HitTester.for_state(rec, unzoomed(), canvas_width=1200)
    assert ht.mapper.to_pixel_x(100) == 100
    assert ht.nearest_base(105) == 0
    assert ht.nearest_base(500) is None


def test_nearest_base_skips_offscreen():
    rec = make_record([100, 400, 1300], length=2000)
    ht = HitTester.for_state(rec, unzoomed(), canvas_width=1200)
    assert ht.nearest_base(380) == 1
    assert ht.nearest_base(1190) is None

    # scrolled to the end, the third base is on screen
    ht = HitTester.for_state(rec, scroll_to(unzoomed(), 1),
                             canvas_width=1200)
    assert (ht.mapper.start, ht.mapper.end) == (800, 2000)
    assert ht.nearest_base(500) == 2


def test_click_and_hover():
    rec = make_record([100, 400])
    ht = HitTester.for_state(rec, unzoomed(), canvas_width=1200)
    s = ht.click(unzoomed(), 390)
    assert s.selected == 1
    s = ht.hover(s, 120)
    assert (s.selected, s.hovered) == (1, 0)
    s = ht.click(s, 900)
    assert s.selected is None
    assert leave(s).hovered is None


def test_edit():
    rec = make_record([100, 400, 700])
    s = unzoomed()
    with pytest.raises(SelectionError):
        edit(rec, s, 1, 'G')
    s = select(s, 1)
    with pytest.raises(SelectionError):
        edit(rec, s, 2, 'G')

    q, p = list(rec.quality), list(rec.peak_locations)
    s = edit(rec, s, 1, 'G')
    assert rec.base_calls[1] == 'G'
    assert 1 in s.edited
    assert rec.sequence == ''.join(rec.base_calls) == 'AGG'
    assert list(rec.quality) == q
    assert list(rec.peak_locations) == p
    assert len(rec.base_calls) == len(rec.quality) == 3

    s = clear_selection(s)
    assert s.selected is None
    assert s.edited == {1}


def test_highlight():
    rec = make_record([100, 400, 700, 1000])
    s = set_highlight(unzoomed(), 2, 3, rec.sequence_length)
    assert s.highlight == (2, 3)
    assert highlighted_sequence(rec, s) == 'CG'
    for start, end in ((0, 2), (3, 2), (1, 5)):
        with pytest.raises(RangeError):
            set_highlight(s, start, end, rec.sequence_length)


def test_selection_edit_model():
    rec = make_record([100, 400, 700, 1000])
    model = SelectionEditModel(rec, unzoomed())
    model.select(3)
    assert model.selected_base == 'T'
    model.edit(3, 'a')
    assert rec.sequence == 'ACGA'
    assert model.state.edited == {3}
    assert model.highlight_range(3, 4) == 'GA'
    assert model.highlighted_sequence() == 'GA'
    model.clear_selection()
    assert model.selected_base is None
    with pytest.raises(IndexError):
        model.select(4)


def test_scene():
    rec = make_record([100, 400, 1100])
    s = toggle_channel(unzoomed(), 'T')
    s = set_highlight(select(s, 1)._replace(hovered=1), 1, 2, 3)
    scene = build_scene(rec, s, canvas_width=1200)

    assert set(scene.polylines) == {'A', 'G', 'C'}
    assert scene.polylines['A'].shape == (1200, 2)
    ys = np.concatenate([p[:, 1] for p in scene.polylines.values()])
    assert ys.min() >= 50 - 1e-9 and ys.max() <= 170

    assert [lb.index for lb in scene.labels] == [0, 1, 2]
    assert [lb.x for lb in scene.labels] == [100, 400, 1100]
    assert scene.labels[1].selected and scene.labels[1].hovered
    assert [b.passes for b in scene.quality_bars] == [False, True, True]
    assert scene.quality_bars[2].height == 30 / 60. * 12

    assert scene.markers == [(100, 1)]
    assert scene.highlight == (100, 400)
    assert scene.selected_x == 400
    assert scene.hovered_x is None
    assert scene.threshold_y == 170 + 20 + 20 / 60. * 12


def test_scene_flags():
    rec = make_record([100, 400])
    rec.base_calls[0] = 'N'
    s = select(unzoomed(), 1)
    s = edit(rec, s, 1, 'T')
    scene = build_scene(rec, s, canvas_width=1200)
    assert scene.labels[0].ambiguous
    assert scene.labels[1].edited and not scene.labels[0].edited


def test_scene_empty():
    rec = ChromatogramRecord({}, [], [], [])
    scene = build_scene(rec, unzoomed(), canvas_width=1200)
    assert scene.polylines == {}
    assert scene.labels == []


def test_select_out_of_range():
    rec = make_record([100, 400])
    s = select(unzoomed(), 1, rec.sequence_length)
    assert s.selected == 1
    for index in (-1, 2, 50):
        with pytest.raises(IndexError):
            select(unzoomed(), index, rec.sequence_length)

    # a stale selection from a longer record is not drawn
    scene = build_scene(rec, unzoomed()._replace(selected=5, hovered=7),
                        canvas_width=1200)
    assert scene.selected_x is None
    assert scene.hovered_x is None
    assert not any(lb.selected for lb in scene.labels)


def test_marker_interval():
    assert marker_interval(2.5) == 50
    assert marker_interval(6) == 25
    assert marker_interval(12) == 10
