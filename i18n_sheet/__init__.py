"""Convert translation files (.json / .ts / .js) to and from Excel workbooks."""

__version__ = "0.1.0"
