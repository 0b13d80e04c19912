"""
Selecting, editing and highlighting bases of a ChromatogramRecord.
"""
import logging

from seqtrace.view.state import ViewState

log = logging.getLogger(__name__)


class SelectionError(ValueError):
    pass


class RangeError(ValueError):
    pass


def select(state, index, sequence_length=None):
    """
    Selects base index. With sequence_length the index is checked
    against the record first.
    """
    if sequence_length is not None and not 0 <= index < sequence_length:
        raise IndexError('base {} out of range'.format(index))
    return state._replace(selected=index)


def clear_selection(state):
    return state._replace(selected=None)


def edit(record, state, index, symbol):
    """
    Changes the base call at index, which must be the selected base.
    The record is changed in place; the returned state remembers that
    the base was edited.
    """
    if state.selected is None or state.selected != index:
        raise SelectionError('base {} is not selected'.format(index))
    old = record.base_calls[index]
    record.edit_base(index, symbol)
    log.info('%s: edited position %d from %s to %s', record.filename,
             index + 1, old, record.base_calls[index])
    return state._replace(edited=state.edited | {index})


def set_highlight(state, start, end, sequence_length):
    """
    Highlights bases start through end, counted from 1 and inclusive.
    """
    start, end = int(start), int(end)
    if not 1 <= start <= end <= sequence_length:
        raise RangeError('invalid range {}-{} for a {}-base '
                         'sequence'.format(start, end, sequence_length))
    return state._replace(highlight=(start, end))


def clear_highlight(state):
    return state._replace(highlight=None)


def highlighted_sequence(record, state):
    if state.highlight is None:
        return ''
    return record.subsequence(*state.highlight)


class SelectionEditModel(object):
    """
    Keeps the record and the current ViewState of one viewer session
    together.
    """
    def __init__(self, record, state=None):
        self.record = record
        self.state = ViewState.initial() if state is None else state

    def select(self, index):
        self.state = select(self.state, index, self.record.sequence_length)

    def edit(self, index, symbol):
        self.state = edit(self.record, self.state, index, symbol)

    def clear_selection(self):
        self.state = clear_selection(self.state)

    def highlight_range(self, start, end):
        self.state = set_highlight(self.state, start, end,
                                   self.record.sequence_length)
        return highlighted_sequence(self.record, self.state)

    def highlighted_sequence(self):
        return highlighted_sequence(self.record, self.state)

    @property
    def selected_base(self):
        if self.state.selected is None:
            return None
        return self.record.base_calls[self.state.selected]
