import pytest
from pydantic import ValidationError

from galleryfolders.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.root_prefix == "gallery"
    assert settings.listing_limit == 1000
    assert settings.recent_limit == 4


def test_from_environment(monkeypatch):
    monkeypatch.setenv("GALLERY_ROOT_PREFIX", "/photos/")
    monkeypatch.setenv("GALLERY_RECENT_LIMIT", "6")
    settings = Settings()
    assert settings.root_prefix == "photos"
    assert settings.recent_limit == 6


@pytest.mark.parametrize("kwargs", [dict(root_prefix="/"), dict(listing_limit=0), dict(recent_limit=-1)])
def test_invalid(kwargs):
    with pytest.raises(ValidationError):
        Settings(**kwargs)
