from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from i18n_sheet.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('i18n_sheet.services.progress.is_tty_enabled', return_value=True), \
             patch('i18n_sheet.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Parsing")

            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Parsing",
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('i18n_sheet.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(5)
            assert tracker.enabled is False
            assert tracker.pbar is None
            tracker.start_file(Path("vi.ts"))
            tracker.finish_file(keys=3)
            tracker.close()
            assert tracker.current_file == 1

    def test_file_cycle_updates_bar(self):
        mock_pbar = Mock()
        with patch('i18n_sheet.services.progress.is_tty_enabled', return_value=True), \
             patch('i18n_sheet.services.progress.tqdm', return_value=mock_pbar):

            with ProgressTracker(2, description="Parsing") as tracker:
                tracker.start_file(Path("vi.ts"))
                mock_pbar.set_description.assert_called_with("Parsing (vi.ts)")
                tracker.finish_file(keys=12)

            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_postfix.assert_called_once_with(keys=12)
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
