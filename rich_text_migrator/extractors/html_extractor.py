import glob
import os
import re
import unicodedata


def _codename_from_name(name):
    """Derive a Kontent.ai style codename (lowercase, underscores) from a file name."""
    text = unicodedata.normalize("NFKD", name)
    text = "".join(c for c in text if not unicodedata.combining(c)).lower()
    text = re.sub(r"[^a-z0-9]+", "_", text).strip("_")
    return text[:60]


def extract_document_from_html(file_path):
    """Read a single HTML export file into a normalized document dictionary.

    Args:
        file_path (str): Path to the ``.html`` file.

    Returns:
        dict: ``Name`` (file stem), ``Codename``, ``ContentHTML`` and
        ``SourcePath`` keys.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be decoded as UTF-8.
    """
    name = os.path.splitext(os.path.basename(file_path))[0]
    try:
        with open(file_path, mode="r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise ValueError(f"Error decoding {file_path}: {e}") from e
    return {
        "Name": name,
        "Codename": _codename_from_name(name),
        "ContentHTML": content,
        "SourcePath": file_path,
    }


def extract_documents_from_dir(dir_path):
    """Extract every ``*.html`` file of ``dir_path``, sorted by file name.

    Returns:
        list: One document dictionary per file, see
        :func:`extract_document_from_html`.
    """
    paths = sorted(glob.glob(os.path.join(dir_path, "*.html")))
    return [extract_document_from_html(path) for path in paths]
