# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
# fiftyeight - sprite-digit watch face
"""
fiftyeight renders a small watch face: the time in mixed-width sprite
digits, three dots orbiting the dial, and status widgets in the corners.
"""

__version__ = "1.0.0"
__author__ = "fiftyeight"
