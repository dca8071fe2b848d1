"""
BrandGuard - brand guideline compliance engine for design documents.
"""
__version__ = "1.0.0"
