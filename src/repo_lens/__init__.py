"""Repo Lens: AI-assisted GitHub repository review TUI.

Fetches a repository's metadata, commits and root-level files from GitHub,
asks a language model to review each file, and shows the scored results.
"""

__version__ = "0.1.0"
