"""Export engine that pushes a single rich-text note to Markdown files and Apple Notes."""

__version__ = "0.3.0"
