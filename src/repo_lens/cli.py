"""CLI entry point for repo-lens."""


def main() -> None:
    """Launch the Repo Lens TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (GITHUB_TOKEN, GEMINI_API_KEY, ...)

    from repo_lens.app import RepoLensApp
    from repo_lens.config import Settings
    from repo_lens.log import configure_logging

    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)

    app = RepoLensApp(settings=settings)
    app.run()


if __name__ == "__main__":
    main()
