"""
Stream helpers.
"""

from typing import BinaryIO


def to_byte_array(stream: BinaryIO, chunk_size: int = 4096) -> bytes:
    """Read all remaining data from a binary stream.

    Args:
        stream: File-like object opened in binary mode
        chunk_size: Number of bytes requested per read

    Returns:
        The bytes read
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")

    chunks = []
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)
