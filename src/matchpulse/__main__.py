"""
MatchPulse CLI Entry Point

Allows running the package as a module: python -m matchpulse
"""

from matchpulse.cli import app


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
