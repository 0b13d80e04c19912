import pytest


@pytest.fixture(autouse=True)
def isolated_prefs(tmp_path, monkeypatch):
    """
    Keeps a seqtrace.ini in the user's home or working directory from
    changing the defaults the tests expect.
    """
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.chdir(tmp_path)
