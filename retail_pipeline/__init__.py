"""
Retail sales pipeline: clean online retail transactions and answer
the fixed set of revenue questions.
"""

__version__ = "0.1.0"
