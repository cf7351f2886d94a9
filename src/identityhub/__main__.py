"""Entry point for 'python -m identityhub' command."""

from identityhub.cli import main

if __name__ == "__main__":
    main()
