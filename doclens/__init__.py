"""
doclens - TF-IDF retrieval over package documentation.
"""

VERSION = "0.1.0"
