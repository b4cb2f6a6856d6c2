"""Internal helpers: defaults and file-format support not part of the public API."""
