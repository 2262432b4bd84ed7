"""File handling utilities."""

from pathlib import Path


def ensure_output_dir(output_path: Path) -> Path:
    """Ensure the parent directory of an output file exists.

    Args:
        output_path: Path to the output file

    Returns:
        Path object for the parent directory
    """
    parent = output_path.parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def staging_path(output_path: Path) -> Path:
    """Sibling path an artifact is built at before being moved into place."""
    return output_path.with_name(output_path.name + '.tmp')


def remove_quietly(path: Path) -> None:
    """Delete a file if it exists."""
    if path.exists():
        path.unlink()
