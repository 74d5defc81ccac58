from gqlbind.logger import get_logger

__author__ = """gqlbind contributors"""
__version__ = "0.1.0"

log = get_logger("gqlbind")
