#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}]
    python main.py scores
    python main.py reset-scores
"""
from src.minefield.cli import main


if __name__ == "__main__":
    main()
