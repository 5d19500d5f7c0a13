"""
Product Performance Analyzer
"""
__version__ = "1.0.0"
