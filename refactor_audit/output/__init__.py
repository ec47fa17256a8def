"""Report writers: JSON document, Markdown narrative, terminal summary."""
