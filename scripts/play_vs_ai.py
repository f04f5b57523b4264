#!/usr/bin/env python3
"""Play Lines of Action in the console against the alpha-beta player."""

from loa.cli import main


if __name__ == "__main__":
    main()
