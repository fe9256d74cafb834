"""
File helpers for loading weighted sequence matrices.
"""

import gzip
import mimetypes
import pathlib
from typing import TextIO, Union


def open_file_transparently(
    file_path: Union[str, pathlib.Path], mode: str = "rt", encoding: str = "utf-8"
) -> TextIO:
    """Opens a text file, transparently handling gzip compression.

    Compression is inferred from the file extension.

    Args:
        file_path: Path to the file.
        mode: Text mode to open with ("rt" or "wt"). Defaults to "rt".
        encoding: Text encoding. Defaults to UTF-8 so alphabets may use any symbol.

    Returns:
        A text file object.

    Raises:
        FileNotFoundError: If reading and the file does not exist.
        ValueError: If `mode` is a binary mode.
        TypeError: If file_path is not a str or pathlib.Path.
        IOError: If an I/O error occurs during opening.
    """
    if not isinstance(file_path, (str, pathlib.Path)):
        raise TypeError(
            f"file_path must be a string or pathlib.Path, not {type(file_path)}"
        )
    if "b" in mode:
        raise ValueError(f"Only text modes are supported, got '{mode}'.")
    if "t" not in mode:
        mode += "t"

    file_path = pathlib.Path(file_path)
    if "r" in mode and not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    _, compression = mimetypes.guess_type(str(file_path))

    try:
        if compression == "gzip":
            return gzip.open(file_path, mode=mode, encoding=encoding)  # type: ignore[return-value]
        return open(file_path, mode=mode, encoding=encoding)
    except OSError as e:
        raise IOError(f"Error opening file {file_path} with mode '{mode}': {e}") from e
