from seqtrace.trace.record import ChromatogramRecord  # NOQA
from seqtrace.trace.math_traces import smooth  # NOQA
