from seqtrace.view.state import ViewState  # NOQA
from seqtrace.view.viewport import ViewportMapper  # NOQA
from seqtrace.view.hittest import HitTester  # NOQA
from seqtrace.view.selection import SelectionEditModel  # NOQA
from seqtrace.view.scene import build_scene  # NOQA
