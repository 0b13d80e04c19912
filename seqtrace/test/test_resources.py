from seqtrace.resources import get_pref
from seqtrace.tracefile import read_file
from seqtrace.view.state import ViewState


def write_ini(tmp_path, monkeypatch, text):
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / 'seqtrace.ini').write_text(text)


def test_get_pref(tmp_path, monkeypatch):
    write_ini(tmp_path, monkeypatch, '[view]\ncanvas_width = 800\n'
              'zoom = 4.5\n[scf]\npeak_policy = native\n'
              '[load]\nfallback = no\n')
    assert get_pref('view.canvas_width', 1200) == 800
    assert get_pref('view.zoom', 2.5) == 4.5
    assert get_pref('scf.peak_policy', 'interpolate') == 'native'
    assert get_pref('load.fallback', True) is False
    assert get_pref('view.missing', 7) == 7
    assert get_pref('nosection.key') is None
    assert ViewState.initial().zoom == 4.5


def test_read_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    p = tmp_path / 'empty.ab1'
    p.write_bytes(b'')
    rec = read_file(str(p), fallback=True)
    assert rec.file_format == 'MOCK'
    assert rec.filename == 'empty.ab1'


def test_prefs_default_without_ini():
    assert get_pref('scf.peak_policy', 'interpolate') == 'interpolate'
    assert get_pref('load.fallback', True) is True
    assert ViewState.initial().zoom == 2.5
