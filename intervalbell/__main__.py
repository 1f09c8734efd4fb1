"""Allow running IntervalBell as a module: python -m intervalbell."""

import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import IntervalBellApp


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="intervalbell", description="Interval workout timer")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("INTERVALBELL_LOG_LEVEL", "WARNING"),
        help="logging level (default: WARNING, or $INTERVALBELL_LOG_LEVEL)",
    )
    # Qt consumes its own flags from sys.argv; ignore whatever we don't know
    args, _ = parser.parse_known_args(argv)
    return args


def main() -> None:
    args = _parse_args(sys.argv[1:])
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("IntervalBell")
    app.setOrganizationName("IntervalBell")

    window = IntervalBellApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
