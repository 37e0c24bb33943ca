"""
Kimai Tray
Status-area applet showing the running Kimai timesheet and the ten most
recent ones, with one-click restart and stop.
"""

__version__ = "0.1.0"
