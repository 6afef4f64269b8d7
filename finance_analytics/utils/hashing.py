"""String hashing shared by color assignment"""


def hash_string(value: str) -> int:
    """
    Deterministic 32-bit string hash (h * 31 + char), returned as a non-negative int.

    Names are case-folded and stripped first so "Mercado" and " mercado" hash alike.
    """
    h = 0
    for char in value.lower().strip():
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)
