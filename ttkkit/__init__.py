"""Application toolkit: XXTEA strings, option parsing, XML, file locks, single-instance peers, signal dumps and window geometry."""

__version__ = "2.8.0"