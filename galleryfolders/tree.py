"""
Synthesize one level of the folder tree from a flat object listing.

The object store has no folders, so a folder is any prefix that at least one key lives under.
Every call works on a fresh listing and keeps no state between requests.
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from galleryfolders.models import FolderNode, ObjectRecord
from galleryfolders.paths import join_path, relative_segments, search_prefix


@dataclass
class IndexedLevel:
    direct_images: list[ObjectRecord] = field(default_factory=list)
    # subfolder name -> objects anywhere below it, in listing order
    subfolder_groups: dict[str, list[ObjectRecord]] = field(default_factory=dict)


def index_objects(objects: Iterable[ObjectRecord], root_prefix: str, current_path: str = "") -> IndexedLevel:
    """
    Partition the objects under ``root_prefix/current_path/`` into direct images of that folder and
    groups per immediate subfolder. An object is attributed to a subfolder by the first segment after
    the prefix only; deeper nesting is not visible at this level.
    Callers must have validated current_path (see paths.normalize_folder).
    """
    prefix = search_prefix(root_prefix, current_path)
    level = IndexedLevel()
    for obj in objects:
        segments = relative_segments(obj.key, prefix)
        if not segments:
            continue
        if len(segments) == 1:
            level.direct_images.append(obj)
        else:
            level.subfolder_groups.setdefault(segments[0], []).append(obj)
    return level


def compose_folders(
    subfolder_groups: Mapping[str, list[ObjectRecord]],
    descriptions: Mapping[str, str | None],
    root_prefix: str,
    current_path: str = "",
) -> list[FolderNode]:
    """
    Turn subfolder groups into folder nodes. The cover is the first object of the group in listing
    order, and the description is looked up by the bare folder name.
    """
    folders = []
    for name, group in subfolder_groups.items():
        if not group:
            continue
        path = join_path(current_path, name)
        folders.append(
            FolderNode(
                name=name,
                path=path,
                full_path=join_path(root_prefix, path),
                cover_image=group[0].url,
                count=len(group),
                description=descriptions.get(name),
            )
        )
    return folders
