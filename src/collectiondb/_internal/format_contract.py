"""Default values for the collection database tooling.

These are defaults for the CLI and keyword arguments only; no kernel
function reads them implicitly.
"""

# Client build stamp written by the original tool; newer clients still accept it.
DEFAULT_CLIENT_VERSION = 20220906

DEFAULT_OUTPUT_FILENAME = "collection.db"
DEFAULT_CACHE_FILENAME = "collection_hashes.txt"
DEFAULT_LINKS_FILENAME = "links.txt"

# One lookup request per second.
DEFAULT_LOOKUP_INTERVAL_SECONDS = 1.0

CACHE_FIELD_SEPARATOR = "|"
LINKS_COMMENT_PREFIX = "#"
