# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""Allow ``python -m fiftyeight``."""

from .cli import main

if __name__ == "__main__":
    main()
