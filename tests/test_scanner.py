"""
Tests for .app bundle discovery, display-name resolution and the catalog
service.

Uses real directories and plist files under tmp_path.
"""

import threading

from conftest import make_bundle

from quickgrid.models import Catalog, natural_key
from quickgrid.services.catalog import CatalogService
from quickgrid.services.scanner import preferred_languages, resolve_display_name, scan_applications


class TestResolveDisplayName:
    """Test the display-name fallback chain."""

    def test_localized_name_wins(self, tmp_path):
        bundle = make_bundle(
            tmp_path, "WeChat.app",
            info={"CFBundleName": "WeChat"},
            localized={"zh-Hans": {"CFBundleDisplayName": "微信"}},
        )
        assert resolve_display_name(bundle, ["zh-Hans", "en"]) == "微信"

    def test_language_order_is_respected(self, tmp_path):
        bundle = make_bundle(
            tmp_path, "Notes.app",
            localized={"de": {"CFBundleName": "Notizen"}, "en": {"CFBundleName": "Notes"}},
        )
        assert resolve_display_name(bundle, ["en", "de"]) == "Notes"

    def test_display_name_preferred_over_bundle_name(self, tmp_path):
        bundle = make_bundle(
            tmp_path, "Visual Studio Code.app",
            info={"CFBundleDisplayName": "Code", "CFBundleName": "Electron"},
        )
        assert resolve_display_name(bundle) == "Code"

    def test_falls_back_to_bundle_name(self, tmp_path):
        bundle = make_bundle(tmp_path, "Safari.app", info={"CFBundleName": "Safari"})
        assert resolve_display_name(bundle, ["en"]) == "Safari"

    def test_falls_back_to_file_name_without_plist(self, tmp_path):
        bundle = make_bundle(tmp_path, "Mystery Tool.app")
        assert resolve_display_name(bundle) == "Mystery Tool"

    def test_corrupt_plist_falls_back_to_file_name(self, tmp_path):
        bundle = make_bundle(tmp_path, "Broken.app")
        (bundle / "Contents" / "Info.plist").write_text("<?xml this is not a plist")
        assert resolve_display_name(bundle) == "Broken"

    def test_text_strings_file_is_skipped(self, tmp_path):
        bundle = make_bundle(tmp_path, "Old.app", info={"CFBundleName": "Old App"})
        lproj = bundle / "Contents" / "Resources" / "en.lproj"
        lproj.mkdir(parents=True)
        (lproj / "InfoPlist.strings").write_text('CFBundleName = "Localized";\n')
        assert resolve_display_name(bundle, ["en"]) == "Old App"

    def test_blank_names_are_ignored(self, tmp_path):
        bundle = make_bundle(tmp_path, "Blank.app", info={"CFBundleDisplayName": "  "})
        assert resolve_display_name(bundle) == "Blank"


class TestPreferredLanguages:
    def test_chinese_locale_maps_to_script(self):
        assert preferred_languages("zh_CN.UTF-8")[:3] == ["zh-Hans", "zh_CN", "zh"]

    def test_english_fallbacks_always_present(self):
        langs = preferred_languages("")
        assert langs == ["en", "English", "Base"]

    def test_posix_locale_is_ignored(self):
        assert preferred_languages("C") == ["en", "English", "Base"]

    def test_no_duplicates(self):
        langs = preferred_languages("en_US.UTF-8")
        assert langs == ["en_US", "en", "English", "Base"]


class TestScanApplications:
    """Test scanning directories for bundles."""

    def test_finds_bundles_sorted_by_name(self, apps_root):
        items = scan_applications([str(apps_root)], languages=[])
        assert [i.display_name for i in items] == ["Code", "NoPlist", "Safari"]
        assert items[2].identifier == str(apps_root / "Safari.app")

    def test_items_have_search_keys(self, apps_root):
        items = scan_applications([str(apps_root)], languages=[])
        code = items[0]
        assert code.transliterated == "code"
        assert code.initials == "c"

    def test_missing_root_is_skipped(self, apps_root, tmp_path):
        items = scan_applications([str(tmp_path / "nope"), str(apps_root)], languages=[])
        assert len(items) == 3

    def test_hidden_entries_and_plain_files_are_skipped(self, tmp_path):
        root = tmp_path / "Apps"
        root.mkdir()
        make_bundle(root, ".Hidden.app")
        make_bundle(root, "Visible.app")
        (root / "Readme.app").write_text("not a bundle")
        (root / "folder").mkdir()

        items = scan_applications([str(root)], languages=[])
        assert [i.display_name for i in items] == ["Visible"]

    def test_same_root_twice_gives_one_item_per_bundle(self, apps_root):
        items = scan_applications([str(apps_root), str(apps_root)], languages=[])
        assert len(items) == 3

    def test_no_roots_gives_empty_list(self):
        assert scan_applications([], languages=[]) == []


class TestNaturalOrder:
    def test_numbers_sort_by_value(self):
        names = ["App 10", "app 2", "App 1"]
        assert sorted(names, key=natural_key) == ["App 1", "app 2", "App 10"]


class TestCatalogService:
    """Test publishing of complete catalog snapshots."""

    def test_scan_publishes_catalog(self, apps_root):
        published = []
        service = CatalogService([str(apps_root)], languages=["en"], publish=published.append)

        catalog = service.scan()

        assert published == [catalog]
        assert service.catalog is catalog
        assert len(catalog) == 3
        assert str(apps_root / "Safari.app") in catalog

    def test_scan_async_publishes_from_worker(self, apps_root):
        done = threading.Event()
        published = []

        def publish(catalog):
            published.append(catalog)
            done.set()

        service = CatalogService([str(apps_root)], languages=["en"], publish=publish)
        worker = service.scan_async()
        worker.join(timeout=5)

        assert done.is_set()
        assert isinstance(published[0], Catalog)
        assert len(published[0]) == 3

    def test_stale_scan_is_dropped(self, apps_root):
        published = []
        service = CatalogService([str(apps_root)], languages=["en"], publish=published.append)

        stale = service._next_generation()
        service.scan()
        assert service._run(stale) is None
        assert len(published) == 1

    def test_empty_before_first_scan(self):
        assert len(CatalogService([]).catalog) == 0

    def test_superseded_scan_cannot_publish_after_newer(self, apps_root):
        entered = threading.Event()
        gate = threading.Event()
        published = []

        def publish(catalog):
            published.append(catalog)
            if len(published) == 1:
                # Hold the first publish until the newer scan has started
                entered.set()
                gate.wait(timeout=5)

        service = CatalogService([str(apps_root)], languages=["en"], publish=publish)
        first = service.scan_async()
        assert entered.wait(timeout=5)

        second = threading.Thread(target=service.scan)
        second.start()
        second.join(timeout=0.2)
        assert len(published) == 1

        gate.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert len(published) == 2
        assert published[-1] is service.catalog
