# ==============================================================================
# FILE: core/validator.py
# PURPOSE: Dotted-quad IPv4 address check.
# ==============================================================================


def is_ipv4_address(value) -> bool:
    """Returns True if value is a dotted IPv4 address such as 192.168.1.1."""
    if not isinstance(value, str):
        return False
    parts = value.split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        # str.isdigit() accepts non-ASCII digits, so check the ASCII range explicitly
        if not part or not all("0" <= ch <= "9" for ch in part):
            return False
        if int(part) > 255:
            return False
    return True
