"""
Tests for the linear undo/redo history.
"""

import pytest

from photool.processing import HistoryStack, NoHistory, NoImageLoaded
from photool.processing.color import brightness, grayscale, sepia


@pytest.fixture
def history(image):
    stack = HistoryStack()
    stack.reset(image)
    return stack


class TestReset:
    """Test seeding the history."""

    def test_seeds_exactly_one_entry(self, history, image):
        assert len(history) == 1
        assert history.cursor == 0
        assert history.current().equals(image)
        assert history.original().equals(image)

    def test_reset_discards_previous_session(self, history, image, make_image):
        history.commit(sepia(image))
        other = make_image(8, 8, seed=9)
        history.reset(other)
        assert len(history) == 1
        assert history.original().equals(other)

    def test_empty_history(self):
        stack = HistoryStack()
        assert stack.is_empty
        assert stack.cursor == -1
        with pytest.raises(NoImageLoaded):
            stack.current()
        with pytest.raises(NoImageLoaded):
            stack.commit(None)


class TestCommit:
    """Test publishing edits."""

    def test_commit_advances_cursor(self, history, image):
        history.commit(sepia(image), label="Sepia")
        assert len(history) == 2
        assert history.cursor == 1
        assert history.entries[-1].label == "Sepia"

    def test_committed_buffers_are_frozen(self, history, image):
        edited = sepia(image)
        history.commit(edited)
        assert history.current().is_frozen
        assert history.original().is_frozen
        # The caller's buffer stays writable
        assert not edited.is_frozen

    def test_published_entries_never_change(self, history, image):
        edited = sepia(image)
        history.commit(edited)
        edited.pixels[0, 0, 0] ^= 0xFF
        assert history.current().equals(sepia(image))

    def test_commit_after_undo_prunes_redo_branch(self, history, image):
        history.commit(sepia(image))
        history.commit(grayscale(image))
        history.undo()
        history.undo()
        history.commit(brightness(image, 150))

        assert len(history) == 2
        assert not history.can_redo()
        with pytest.raises(NoHistory):
            history.redo()


class TestUndoRedo:
    """Test cursor movement."""

    def test_undo_at_original_fails(self, history):
        assert not history.can_undo()
        with pytest.raises(NoHistory):
            history.undo()
        assert history.cursor == 0

    def test_redo_at_tail_fails(self, history, image):
        history.commit(sepia(image))
        with pytest.raises(NoHistory):
            history.redo()
        assert history.cursor == 1

    def test_undo_redo_inverse(self, history, image):
        edits = [sepia(image), grayscale(image), brightness(image, 80)]
        for edit in edits:
            history.commit(edit)

        for position in (3, 2, 1):
            while history.cursor > position:
                history.undo()
            before = history.current()
            history.undo()
            assert history.redo().equals(before)
            assert history.cursor == position

    def test_sepia_brightness_scenario(self, history, image):
        after_sepia = sepia(image)
        history.commit(after_sepia)
        history.commit(brightness(after_sepia))

        history.undo()
        history.undo()
        restored = history.redo()

        assert restored.equals(after_sepia)
        assert history.current().equals(after_sepia)

    def test_summary(self, history, image):
        history.commit(sepia(image), label="Sepia")
        history.undo()
        summary = history.get_history_summary()

        assert summary['total_entries'] == 2
        assert summary['current_position'] == 0
        assert summary['can_undo'] is False
        assert summary['can_redo'] is True
        assert [e['label'] for e in summary['entries']] == ["Original", "Sepia"]
        assert summary['entries'][0]['size'] == image.size

    def test_clear(self, history):
        history.clear()
        assert history.is_empty
        assert not history.can_redo()
