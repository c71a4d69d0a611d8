"""
Fallback version module populated at build time.

For editable or source checkouts this default keeps imports working.
"""

__version__ = "0.1.0"
