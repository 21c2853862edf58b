"""
Zyx Dashboard - Core Module
===========================

Configuration, logging, and storage shared by the API.
"""
