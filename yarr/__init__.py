"""JSON Feed parsing, feed models, HTML sanitizing and content extraction for a feed reader."""

__version__ = "2.4"