"""Package entry point for ``python -m transcription_tools``.

WHY: Users run the tools as ``python -m transcription_tools format
transcript.txt``. Python's ``-m`` flag looks for ``__main__.py`` inside
the package and executes it.

HOW: Delegates to the CLI's main(), which dispatches on the subcommand
(format, summarize, repair, repair-log, serve, mcp).
"""

from transcription_tools.cli import main

if __name__ == "__main__":
    main()
