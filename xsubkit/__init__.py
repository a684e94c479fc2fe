"""Read, write and render timed image subtitles in the xsub format."""

__version__ = "0.1.0"