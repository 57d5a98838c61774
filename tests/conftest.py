"""
Shared test fixtures for the QuickGrid launcher test suite.

Provides temporary history databases, settings files and fake .app bundles
that use real file I/O (no mocking of the filesystem).
"""

import plistlib

import pytest
import toml

from quickgrid.models import Catalog, Item
from quickgrid.services.storage import KeyValueStore


def make_bundle(root, file_name, info=None, localized=None):
    """
    Create a fake .app bundle directory.

    Args:
        root: Directory to create the bundle in
        file_name: Bundle directory name, e.g. "Safari.app"
        info: Dict written as Contents/Info.plist
        localized: {lang: dict} written as <lang>.lproj/InfoPlist.strings
    """
    bundle = root / file_name
    contents = bundle / "Contents"
    contents.mkdir(parents=True)

    if info is not None:
        (contents / "Info.plist").write_bytes(plistlib.dumps(info))

    for lang, strings in (localized or {}).items():
        lproj = contents / "Resources" / f"{lang}.lproj"
        lproj.mkdir(parents=True)
        (lproj / "InfoPlist.strings").write_bytes(
            plistlib.dumps(strings, fmt=plistlib.FMT_BINARY)
        )

    return bundle


def item(name, initials="", transliterated=""):
    """Item with a predictable identifier derived from its name."""
    return Item(
        identifier=f"/Applications/{name}.app",
        display_name=name,
        transliterated=transliterated,
        initials=initials,
    )


@pytest.fixture
def tmp_db(tmp_path):
    """Path for a fresh SQLite history database."""
    return tmp_path / "history.db"


@pytest.fixture
def storage(tmp_db):
    """A real KeyValueStore on disk, closed after the test."""
    store = KeyValueStore(tmp_db)
    yield store
    store.close()


@pytest.fixture
def sample_items():
    return [
        item("Calculator", initials="c"),
        item("Finder", initials="f"),
        item("Safari", initials="s"),
        item("Terminal", initials="t"),
        item("微信", initials="wx", transliterated="weixin"),
    ]


@pytest.fixture
def catalog(sample_items):
    return Catalog(sample_items)


@pytest.fixture
def apps_root(tmp_path):
    """A directory holding a few fake application bundles."""
    root = tmp_path / "Applications"
    root.mkdir()
    make_bundle(root, "Safari.app", {"CFBundleName": "Safari"})
    make_bundle(root, "Visual Studio Code.app", {"CFBundleDisplayName": "Code"})
    make_bundle(root, "NoPlist.app")
    return root


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with a few overrides."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "launcher": {"close_delay_ms": 500},
        "grid": {"columns": 6},
        "history": {"show_frequent": True},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
