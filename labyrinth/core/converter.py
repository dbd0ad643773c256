"""
Text-to-binary converter for maze files.

Maze files are often authored as text: every '0' or '1' character is one
bit, most significant bit first. Anything else (spaces, newlines, comments
without digits) is ignored, so bytes may be grouped freely:

    10100000 11110000 ...
"""

from pathlib import Path


def convert_text_to_bytes(content: str) -> bytes:
    """
    Pack the '0'/'1' characters of content into bytes.

    A trailing partial byte is padded with zero bits on the right.
    """
    data = bytearray()
    value = 0
    count = 0
    for char in content:
        if char not in ("0", "1"):
            continue
        value = (value << 1) | (1 if char == "1" else 0)
        count += 1
        if count == 8:
            data.append(value)
            value = 0
            count = 0
    if count:
        data.append(value << (8 - count))
    return bytes(data)


def bytes_to_text(data: bytes, group: int = 3) -> str:
    """Render bytes as bit text, `group` bytes per line."""
    if group < 1:
        raise ValueError("group must be at least 1")
    lines = []
    for offset in range(0, len(data), group):
        chunk = data[offset:offset + group]
        lines.append(" ".join(f"{byte:08b}" for byte in chunk))
    return "\n".join(lines)


def convert_txt_to_bin(txt_file_path: Path | str, bin_file_path: Path | str) -> int:
    """
    Convert a bit-text maze file into a binary maze file.

    Returns:
        Number of bytes written.

    Raises:
        FileNotFoundError: If the text file doesn't exist.
        OSError: If either file cannot be read or written.
    """
    txt_file_path = Path(txt_file_path)
    bin_file_path = Path(bin_file_path)

    data = convert_text_to_bytes(txt_file_path.read_text(encoding="utf-8"))
    bin_file_path.write_bytes(data)
    return len(data)
