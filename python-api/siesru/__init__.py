"""
SIE to SRU - converts Swedish SIE bookkeeping exports into INK2 SRU files.
"""

__version__ = "1.0.0"
