"""
Business hours service.

A Flask API that adds business days and business hours to an instant
under a working calendar with a remotely published holiday list.
"""

__version__ = "1.0.0"
