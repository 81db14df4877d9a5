"""
FIB Study

Imports reading-passage fill-in-the-blank question sets from CSV, reviews
and saves them to a document store, and looks up tapped words through a
cache-aside dictionary.
"""

__version__ = "0.1.0"
