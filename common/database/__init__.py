"""
Database module - async MongoDB access through Motor.
"""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]
