# gzassets/io/constants.py

# Suffix appended to a logical path to find its gzip-compressed sibling
GZIP_SUFFIX: str = ".gz"

# Destination size used when draining a file in full
DEFAULT_CHUNK_SIZE: int = 32 * 1024
