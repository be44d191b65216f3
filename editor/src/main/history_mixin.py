"""History actions and undo/redo state for CoDrawing Canvas Editor"""

from utils.errors import InvalidRevertIndex
from utils.logger import loggerRaise


class HistoryMixin:
    """Undo/redo, revert, clear and status bar updates"""
    
    def _on_history_changed(self, can_undo, can_redo):
        """Called by the history manager whenever the cursor or entries change"""
        history = self.session.history
        if hasattr(self, 'undo_action'):
            undo_desc = history.get_undo_description()
            self.undo_action.setEnabled(can_undo)
            self.undo_action.setText(f"&Undo {undo_desc}" if undo_desc else "&Undo")
        if hasattr(self, 'redo_action'):
            redo_desc = history.get_redo_description()
            self.redo_action.setEnabled(can_redo)
            self.redo_action.setText(f"&Redo {redo_desc}" if redo_desc else "&Redo")
        if hasattr(self, 'history_panel'):
            self.history_panel.refresh(history.snapshots, history.current_index)
        self._update_status_bar()
    
    def undo(self):
        if self.session.undo() is None:
            self.statusBar().showMessage("Nothing to undo", 2000)
    
    def redo(self):
        if self.session.redo() is None:
            self.statusBar().showMessage("Nothing to redo", 2000)
    
    def revert_to(self, index):
        """Jump to a snapshot picked in the history panel"""
        try:
            self.session.revert_to(index)
        except InvalidRevertIndex as e:
            loggerRaise(e, f"Cannot revert to history entry {index}")
    
    def clear_canvas(self):
        self.session.clear_canvas()
    
    def place_image(self):
        """Commit the pending overlay"""
        if self.session.place() is None:
            self.statusBar().showMessage("No image to place", 2000)
    
    def _update_status_bar(self):
        """Show the current snapshot and history position"""
        if not hasattr(self, 'status_left'):
            return
        history = self.session.history
        self.status_left.setText(
            f"{history.get_current_description()}  ({history.current_index + 1}/{len(history)})"
        )
