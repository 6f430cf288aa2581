"""
SignalNoise - entry point
Daily signal/noise task tracker.
"""

from signalnoise.cli import main


if __name__ == "__main__":
    main()
