"""logmerge — extract and deduplicate dashboard access records from a log directory."""

from logmerge.cli import main

if __name__ == "__main__":
    main()
