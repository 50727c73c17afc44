"""
Tests for slider adjustments and the debounced commit.
"""

import asyncio

import pytest

from photool.editor import DebouncedTask
from photool.processing import AdjustmentState, apply_adjustments
from photool.processing.color import brightness, contrast, hue_shift, saturation
from photool.processing.enhance import gaussian_blur


def run(coro):
    return asyncio.run(coro)


class TestAdjustmentState:
    """Test slider state handling."""

    def test_defaults(self):
        state = AdjustmentState()
        assert state.to_dict() == {
            'brightness': 100.0,
            'contrast': 100.0,
            'saturation': 100.0,
            'hue': 0.0,
            'blur': 0.0,
        }

    def test_values_are_clamped(self):
        state = AdjustmentState()
        assert state.set('brightness', 250) == 200.0
        assert state.set('blur', -3) == 0.0

    def test_hue_wraps(self):
        state = AdjustmentState()
        assert state.set('hue', 370) == 10.0
        assert state.set('hue', -90) == 270.0

    def test_unknown_slider(self):
        with pytest.raises(KeyError):
            AdjustmentState().set('exposure', 1)

    def test_reset(self):
        state = AdjustmentState(brightness=150, hue=30, blur=2)
        state.reset()
        assert state == AdjustmentState()


class TestApplyAdjustments:
    """Test the combined rasterization pass."""

    def test_fixed_order(self, image):
        state = AdjustmentState(brightness=110, contrast=60, saturation=130, hue=45)
        expected = hue_shift(saturation(contrast(brightness(image, 110), 60), 130), 45)
        assert apply_adjustments(image, state).equals(expected)

    def test_blur_runs_last(self, image):
        state = AdjustmentState(brightness=90, contrast=50, blur=2)
        expected = gaussian_blur(hue_shift(saturation(contrast(brightness(image, 90), 50), 100), 0), 2)
        assert apply_adjustments(image, state).equals(expected)

    def test_identity_settings(self, image):
        # Contrast 50 is the formula's identity
        state = AdjustmentState(contrast=50)
        assert apply_adjustments(image, state).equals(image)


class TestDebouncedTask:
    """Test the single-slot debounce."""

    def test_fires_once_after_quiet_window(self):
        calls = []

        async def scenario():
            task = DebouncedTask(lambda: calls.append(1), 0.01)
            for _ in range(3):
                task.schedule()
            assert task.pending
            await asyncio.sleep(0.05)
            assert not task.pending

        run(scenario())
        assert calls == [1]

    def test_cancel_prevents_firing(self):
        calls = []

        async def scenario():
            task = DebouncedTask(lambda: calls.append(1), 0.01)
            task.schedule()
            task.cancel()
            await asyncio.sleep(0.05)

        run(scenario())
        assert calls == []

    def test_requires_running_loop(self):
        task = DebouncedTask(lambda: None, 0.01)
        with pytest.raises(RuntimeError):
            task.schedule()


class TestAdjustmentController:
    """Test slider changes through the editor."""

    def test_three_changes_make_one_commit(self, loaded_editor, image):
        async def scenario():
            loaded_editor.set_adjustment('brightness', 110)
            loaded_editor.set_adjustment('brightness', 120)
            loaded_editor.set_adjustment('contrast', 60)
            assert len(loaded_editor.history) == 1
            await asyncio.sleep(0.1)

        run(scenario())
        assert len(loaded_editor.history) == 2
        assert loaded_editor.adjustments.commit_count == 1
        assert loaded_editor.history.entries[-1].label == "Adjustments"

        expected = apply_adjustments(image, AdjustmentState(brightness=120, contrast=60))
        assert loaded_editor.history.current().equals(expected)

    def test_commit_outcome(self, loaded_editor, notifier):
        loaded_editor.session.adjustments.set('saturation', 150)
        outcome = loaded_editor.commit_adjustments()
        assert outcome.succeeded
        assert outcome.title == "Adjustments applied"
        assert notifier.last == outcome

    def test_commit_without_image(self, editor):
        outcome = editor.commit_adjustments()
        assert not outcome.succeeded
        assert outcome.error == "NoImageLoaded"

    def test_loading_cancels_pending_commit(self, loaded_editor, make_image):
        replacement = make_image(10, 10, seed=2)

        async def scenario():
            loaded_editor.set_adjustment('brightness', 150)
            loaded_editor.load(replacement)
            assert not loaded_editor.adjustments.pending
            await asyncio.sleep(0.05)

        run(scenario())
        assert len(loaded_editor.history) == 1
        assert loaded_editor.history.current().equals(replacement)

    def test_close_cancels_pending_commit(self, loaded_editor):
        async def scenario():
            loaded_editor.set_adjustment('hue', 90)
            loaded_editor.close()
            await asyncio.sleep(0.05)

        run(scenario())
        assert len(loaded_editor.history) == 1

    def test_commit_waits_for_running_effect(self, loaded_editor):
        session = loaded_editor.session

        async def scenario():
            session.is_processing = True
            loaded_editor.set_adjustment('brightness', 80)
            await asyncio.sleep(0.05)
            assert len(loaded_editor.history) == 1
            assert loaded_editor.adjustments.pending

            session.is_processing = False
            await asyncio.sleep(0.05)

        run(scenario())
        assert len(loaded_editor.history) == 2
        assert loaded_editor.adjustments.commit_count == 1

    def test_direct_commit_refused_while_processing(self, loaded_editor):
        loaded_editor.session.is_processing = True
        loaded_editor.session.adjustments.set('brightness', 80)

        outcome = loaded_editor.adjustments.commit()
        assert outcome.error == "EditorBusy"
        assert len(loaded_editor.history) == 1
        assert loaded_editor.adjustments.commit_count == 0
