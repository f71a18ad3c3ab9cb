"""
Marker characters and rule syntax constants.
"""

# Field markers. Control characters never survive URL decomposition,
# so they cannot collide with scheme, host or path content.
BEGIN_OF_SCHEME = "\x01"
BEGIN_OF_HOST = "\x02"
BEGIN_OF_PATH = "\x03"

HOST_DELIMITER = "."
PATH_DELIMITER = "/"

# Rule syntax
COMMENT_PREFIX = "!"
EXCEPTION_MARKER = "@"
EXCEPTION_PREFIX = "@@"
REGEX_DELIMITER = "/"
DOMAIN_SUFFIX_PREFIX = "."
DOMAIN_ANCHOR_PREFIX = "||"
URL_ANCHOR_PREFIX = "|"

# Schemes whose empty path normalizes to "/"
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})
