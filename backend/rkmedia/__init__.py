"""
RK Media Server - media library backend
"""

__version__ = "1.0.0"
