import pytest

from galleryfolders.metadata import (
    FolderMetadata,
    delete_folder_metadata,
    description_map,
    get_folder_metadata,
    list_folder_metadata,
    upsert_folder_metadata,
)


def test_upsert_creates_and_updates():
    row = upsert_folder_metadata("Picnic", "Annual picnic")
    assert row.folder_name == "Picnic"
    assert row.description == "Annual picnic"
    created = row.created_at

    row = upsert_folder_metadata("Picnic", "Picnic in the park")
    assert row.description == "Picnic in the park"
    assert row.created_at == created
    assert row.updated_at >= created
    assert FolderMetadata.select().count() == 1


def test_upsert_clears_description():
    upsert_folder_metadata("Picnic", "Annual picnic")
    assert upsert_folder_metadata("Picnic", None).description is None
    assert description_map() == {"Picnic": None}


@pytest.mark.parametrize("name", ["", "   ", None])
def test_upsert_requires_name(name):
    with pytest.raises(ValueError):
        upsert_folder_metadata(name, "x")


def test_get_list_delete():
    upsert_folder_metadata("Retreat", "Weekend away")
    upsert_folder_metadata("Picnic", None)
    assert [m.folder_name for m in list_folder_metadata()] == ["Picnic", "Retreat"]
    assert get_folder_metadata("Retreat").description == "Weekend away"
    assert get_folder_metadata("Nope") is None

    assert delete_folder_metadata("Retreat") is True
    assert delete_folder_metadata("Retreat") is False
    assert description_map() == {"Picnic": None}


def test_description_map_degrades():
    upsert_folder_metadata("Picnic", "Annual picnic")
    FolderMetadata.drop_table()
    assert description_map() == {}
