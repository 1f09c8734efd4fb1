#!/usr/bin/env python3
"""IntervalBell entry point.

Run with:
    python main.py
    python -m intervalbell
"""

from intervalbell.__main__ import main


if __name__ == "__main__":
    main()
