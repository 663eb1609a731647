import re

# Characters that are reserved in filenames on at least one common platform
_RESERVED_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
# Windows device names
_RESERVED_NAMES = re.compile(r'^(con|prn|aux|nul|com[0-9]|lpt[0-9])$', re.IGNORECASE)
MAX_KEY_LENGTH = 255


def is_valid_key(key) -> bool:
    """Return True if `key` can be used verbatim as a filename.

    Rejects empty strings, `.` and `..`, reserved characters, Windows
    device names and names longer than 255 characters.
    """
    if not isinstance(key, str) or not key or len(key) > MAX_KEY_LENGTH:
        return False
    if key in ('.', '..'):
        return False
    if _RESERVED_CHARS.search(key):
        return False
    return not _RESERVED_NAMES.match(key)
