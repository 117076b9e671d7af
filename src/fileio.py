"""Reading source files off disk for storage as inputs."""

from pathlib import Path

from ledger import FileReadError


def read_input_file(file_path: str) -> tuple[Path, str]:
    """Read a UTF-8 text file for storage. Raises FileReadError with the cause."""
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise FileReadError(file_path, "File not found")
    if path.is_dir():
        raise FileReadError(file_path, "Path is a directory, not a file")
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise FileReadError(file_path, "Permission denied")
    except UnicodeDecodeError:
        raise FileReadError(file_path, "File is not valid UTF-8 text")
    except OSError as e:
        raise FileReadError(file_path, f"Unknown I/O error: {e.strerror or e}")
    if not content:
        raise FileReadError(file_path, "File is empty")
    return path, content
