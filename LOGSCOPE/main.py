#!/usr/bin/env python3
"""
LOGSCOPE - Main Entry Point
Run the log browser terminal UI
"""
import sys
import traceback

from LOGSCOPE.config import load_settings
from LOGSCOPE.engine import ConfigurationError
from LOGSCOPE.log_analysis.alert import configure_logging
from LOGSCOPE.UI import run_app


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2

    log_file = configure_logging(settings.app_log_dir)
    print(f"Starting LOGSCOPE on {settings.log_path} (logging to {log_file})")
    print("Press 'q' to quit, 'e' to scan for exceptions, 't' to tail, 'v' to view, backspace for parent folder")
    print("-" * 80)

    try:
        run_app(settings)
    except KeyboardInterrupt:
        print("\nLOGSCOPE terminated by user")
    except Exception as e:
        print(f"\nError running LOGSCOPE: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
