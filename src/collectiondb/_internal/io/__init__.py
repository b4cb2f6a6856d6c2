"""Text file readers and writers used by the CLI."""
