"""Canvas filename generation."""

import re
from datetime import date


def sanitize_filename(name: str) -> str:
    """Lower-kebab-case: 'Root to Gen 3' -> 'root-to-gen-3'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def to_safe_filename(name: str) -> str:
    """Drop characters invalid in file names and dash-join the words."""
    name = re.sub(r'[<>:"/\\|?*]', "", name)
    name = re.sub(r"\s+", "-", name)
    name = re.sub(r"-+", "-", name)
    return name.strip("-").lower()


def generate_canvas_path(
    output_folder: str,
    filename_pattern: str,
    name: str,
    split_type: str,
    today: date | None = None,
) -> str:
    """
    Build a canvas path from a filename pattern.

    Supports {name} (sanitized), {type}, and {date} (ISO) placeholders and
    appends ".canvas" unless the pattern already ends with it.
    """
    today = today or date.today()
    filename = (
        (filename_pattern or "{name}")
        .replace("{name}", sanitize_filename(name))
        .replace("{type}", split_type)
        .replace("{date}", today.isoformat())
    )
    if not filename.endswith(".canvas"):
        filename += ".canvas"

    folder = output_folder.rstrip("/")
    return f"{folder}/{filename}" if folder else filename
