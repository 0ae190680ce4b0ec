# editing/__init__.py

from .actions import EditorState, LineEditor
from .history import HistoryView, LineHistory

__all__ = ['EditorState', 'LineEditor', 'LineHistory', 'HistoryView']
