"""
LinkedIn Clone API
Social network backend and single-page-application host
"""

__version__ = "1.0.0"
