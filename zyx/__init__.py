"""
Zyx Dashboard
=============

Backend API for configuring the Zyx Discord moderation and ticketing bot.
"""

__version__ = "1.0.0"
