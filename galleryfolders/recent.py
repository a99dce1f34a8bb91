"""Rank top-level gallery folders by their most recently added image."""

from typing import Iterable, Mapping

from galleryfolders.models import ObjectRecord, RecentFolderNode
from galleryfolders.paths import join_path, relative_segments, search_prefix


def group_top_level(objects: Iterable[ObjectRecord], root_prefix: str) -> dict[str, list[ObjectRecord]]:
    """
    Group objects by the first segment after the root. Loose images directly in the root are not in
    any folder and are left out.
    """
    prefix = search_prefix(root_prefix)
    groups: dict[str, list[ObjectRecord]] = {}
    for obj in objects:
        segments = relative_segments(obj.key, prefix)
        if not segments or len(segments) < 2:
            continue
        groups.setdefault(segments[0], []).append(obj)
    return groups


def rank_recent_folders(
    objects: Iterable[ObjectRecord],
    root_prefix: str,
    k: int,
    descriptions: Mapping[str, str | None] | None = None,
) -> list[RecentFolderNode]:
    """
    Return at most k top-level folders, newest first. A folder's date and cover image come from its
    most recently created object. Folders with equal dates keep the order in which they were first seen.
    """
    if k <= 0:
        return []
    descriptions = descriptions or {}
    folders = []
    for name, group in group_top_level(objects, root_prefix).items():
        latest = max(group, key=lambda obj: obj.created_at)
        folders.append(
            RecentFolderNode(
                name=name,
                path=name,
                full_path=join_path(root_prefix, name),
                cover_image=latest.url,
                count=len(group),
                description=descriptions.get(name),
                latest_image_date=latest.created_at,
            )
        )
    folders.sort(key=lambda folder: folder.latest_image_date, reverse=True)
    return folders[:k]
