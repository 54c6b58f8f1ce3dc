"""blogstore: tooling for a Markdown blog's content repository.

Posts are Markdown files with a front-matter block (title, date). An
external static-site generator renders them; this package discovers,
scaffolds and lints them.
"""

__version__ = "0.1.0"
