"""mdmeta — reconcile Markdown front-matter metadata against a vocabulary."""

__version__ = "0.1.0"
