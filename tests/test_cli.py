"""Tests for the CLI entry point."""

from unittest.mock import MagicMock, patch


class TestCli:
    def test_main_loads_env_and_runs(self):
        """main() calls load_dotenv, configures logging and launches the app."""
        mock_app_instance = MagicMock()
        with patch("dotenv.load_dotenv") as mock_ld, \
                patch("repo_lens.log.configure_logging") as mock_log, \
                patch("repo_lens.app.RepoLensApp", return_value=mock_app_instance) as mock_cls:
            from repo_lens.cli import main
            main()

        mock_ld.assert_called_once()
        mock_log.assert_called_once()
        settings = mock_cls.call_args.kwargs["settings"]
        assert mock_log.call_args.args == (settings.log_level, settings.log_file)
        mock_app_instance.run.assert_called_once()

    def test_main_callable(self):
        from repo_lens.cli import main
        assert callable(main)
