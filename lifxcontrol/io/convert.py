"""
Bit and byte primitives shared by the frame encoder and the response decoder.

Every multi-byte integer on the wire is little-endian and goes through
write_le() or read_le().

Sub-byte fields are explicit bit arrays, most significant bit first, folded
into integers with shift-and-or.
"""

from ..exceptions import MalformedInputError


Bit = bool


def int_to_bits(value: int, width: int) -> list[Bit]:
    """Return `value` as `width` bits, most significant first."""
    if value < 0 or value >= (1 << width):
        raise ValueError(f"Value {value} does not fit in {width} bits")
    return [bool((value >> shift) & 1) for shift in range(width - 1, -1, -1)]


def bits_to_int(bits: list[Bit]) -> int:
    acc = 0
    for bit in bits:
        acc = (acc << 1) | (1 if bit else 0)
    return acc


def bitstr_to_u32(bits: str) -> int:
    """Fold a string of '0'/'1' characters into an integer.

    Any character other than '0' counts as a set bit.
    """
    return bits_to_int([c != "0" for c in bits]) & 0xFFFFFFFF


def write_le(value: int, width: int) -> bytes:
    """Encode an unsigned integer as `width` little-endian bytes."""
    if value < 0 or value >= (1 << (8 * width)):
        raise ValueError(f"Value {value} does not fit in {width} byte(s)")
    return value.to_bytes(width, byteorder="little")


def extract(data: bytes, start: int, length: int) -> bytes:
    """Return `length` bytes from `data` at `start`, or raise MalformedInputError."""
    if start < 0 or length < 0 or start + length > len(data):
        raise MalformedInputError(
            f"Need {start + length} bytes to read {length} byte(s) at offset {start}, got {len(data)}"
        )
    return bytes(data[start:start + length])


def read_le(data: bytes, start: int, length: int) -> int:
    return int.from_bytes(extract(data, start, length), byteorder="little")


# Renderers used by the decoder to present fields as text

def as_hex(data: bytes) -> str:
    return ":".join(f"{b:02X}" for b in data)


def as_ascii(data: bytes) -> str:
    return data.decode("ascii", errors="replace").rstrip("\x00")


def as_boolean(data: bytes) -> str:
    return "".join(f"{b:08b}" for b in data)
