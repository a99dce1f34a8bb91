"""
Path rules for the virtual folder hierarchy.

Object keys look like ``gallery/EventName/Sub/Image.jpg``: a fixed root segment followed by
any number of folder segments and a file name. Folders only exist as key prefixes, so every
function here works on plain strings and never touches a backend.
"""

from galleryfolders.errors import InvalidPath

FORBIDDEN_SEGMENTS = {".", ".."}
FORBIDDEN_CHARACTERS = ("\\", "\x00")


def split_segments(path: str) -> list[str]:
    """Split a slash delimited path, dropping empty segments"""
    return [segment for segment in path.split("/") if segment]


def _check_segments(path: str, segments: list[str]):
    for char in FORBIDDEN_CHARACTERS:
        if char in path:
            raise InvalidPath(f"Invalid folder path {path!r}: contains {char!r}")
    for segment in segments:
        if segment in FORBIDDEN_SEGMENTS:
            raise InvalidPath(f"Invalid folder path {path!r}: relative segments are not allowed")


def normalize_folder(path: str | None) -> str:
    """
    Clean a folder path relative to the gallery root, e.g. ``/Picnic/2024/`` -> ``Picnic/2024``.
    The empty string denotes the root level.
    :raises InvalidPath: if the path contains relative (``.`` or ``..``) segments or forbidden characters
    """
    if not path:
        return ""
    segments = split_segments(path)
    _check_segments(path, segments)
    return "/".join(segments)


def search_prefix(root_prefix: str, current_path: str = "") -> str:
    """
    The key prefix of all objects inside the given folder: ``gallery/`` for the root level,
    ``gallery/Picnic/`` for the Picnic folder.
    """
    return "/".join(split_segments(root_prefix) + split_segments(current_path)) + "/"


def relative_segments(key: str, prefix: str) -> list[str] | None:
    """Segments of key after prefix, or None if the key does not start with prefix"""
    if not key.startswith(prefix):
        return None
    return split_segments(key[len(prefix) :])


def join_path(*parts: str) -> str:
    return "/".join(segment for part in parts for segment in split_segments(part))


def folder_name(full_path: str) -> str:
    """The bare name of a folder (its last segment), which is how descriptions are keyed"""
    segments = split_segments(full_path)
    return segments[-1] if segments else ""


def validate_deletion_path(full_path: str | None, root_prefix: str) -> str:
    """
    Check that a folder can be deleted: it must be a folder strictly below the gallery root.
    Deleting the root itself, or anything outside it, is refused before any backend is called.
    :return: the cleaned full path, e.g. ``gallery/Picnic``
    """
    if not full_path or not full_path.strip("/"):
        raise InvalidPath("Invalid folder path: the path cannot be empty")
    segments = split_segments(full_path)
    _check_segments(full_path, segments)
    root = split_segments(root_prefix)
    if segments[: len(root)] != root:
        raise InvalidPath(f"Invalid folder path {full_path!r}: not inside {'/'.join(root)}/")
    if len(segments) <= len(root):
        raise InvalidPath(f"Invalid folder path {full_path!r}: cannot delete the gallery root")
    return "/".join(segments)
