#!/usr/bin/env python3
"""
Convenience entry point for running meetingcalendar directly.

Usage: python calendar_cli.py [command] [options]
"""

from meetingcalendar.cli.app import app

if __name__ == "__main__":
    app()
