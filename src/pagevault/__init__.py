"""
pagevault: capture rendered viewer pages and export them as one PDF.

Pages are captured once each as raster snapshots while a document viewer
scrolls, and exported on demand in ascending page order.
"""

__version__ = "0.1.0"
