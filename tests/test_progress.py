"""Tests for the progress reporter."""

import io
import threading

from rich.console import Console

from dirbackup.core.progress import ProgressReporter


class TestProgressReporter:
    """Tests for ProgressReporter class."""

    def test_initial_state(self):
        """Test counters before starting."""
        progress = ProgressReporter(enabled=False)
        assert progress.completed == 0
        assert progress.total == 0
        assert progress.finished is False

    def test_start_sets_total(self):
        """Test that start records the total."""
        progress = ProgressReporter(enabled=False)
        progress.start(10)
        assert progress.total == 10
        progress.finish("done")

    def test_advance(self):
        """Test that advance counts one file."""
        progress = ProgressReporter(enabled=False)
        progress.start(2)
        progress.advance()
        progress.advance()
        assert progress.completed == 2
        progress.finish("done")

    def test_concurrent_advance(self):
        """Test that concurrent increments are not lost."""
        progress = ProgressReporter(enabled=False)
        progress.start(8 * 1000)

        def work():
            for _ in range(1000):
                progress.advance()

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert progress.completed == 8000
        progress.finish("done")

    def test_finish_once(self):
        """Test that finishing twice is harmless."""
        progress = ProgressReporter(enabled=False)
        progress.start(1)
        progress.finish("done")
        progress.finish("done again")
        assert progress.finished is True

    def test_renders_completion_message(self):
        """Test that the completion message is rendered."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=True, width=150)
        progress = ProgressReporter(console=console)
        progress.start(2)
        progress.advance()
        progress.advance()
        progress.finish("Backup completed successfully!")

        rendered = output.getvalue()
        assert "Backup completed successfully!" in rendered
        assert "100%" in rendered

    def test_empty_run_completes_full_bar(self):
        """Test that a successful run over no files shows 100%."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=True, width=150)
        progress = ProgressReporter(console=console)
        progress.start(0)
        progress.finish("Backup completed successfully!")

        rendered = output.getvalue()
        assert "100%" in rendered
        assert progress.completed == 0

    def test_failed_finish_keeps_count(self):
        """Test that a failed finish does not fill the bar."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=True, width=150)
        progress = ProgressReporter(console=console)
        progress.start(4)
        progress.advance()
        progress.finish("Backup failed", success=False)

        rendered = output.getvalue()
        assert "Backup failed" in rendered
        assert "100%" not in rendered
        assert "25%" in rendered

    def test_disabled_renders_nothing(self):
        """Test that a disabled reporter writes nothing."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=True, width=150)
        progress = ProgressReporter(console=console, enabled=False)
        progress.start(1)
        progress.advance()
        progress.finish("done")
        assert output.getvalue() == ""

    def test_context_manager(self):
        """Test usage as a context manager."""
        with ProgressReporter(enabled=False) as progress:
            progress.start(1)
            progress.advance()
        assert progress.completed == 1
