"""
Application Scanner - Enumerate .app bundles on macOS.

Scans the top level of each root directory (no recursion, hidden entries
skipped). A root that is missing or unreadable is skipped, so a scan never
fails; it just finds fewer apps.

Display names fall back through:
  1. localized InfoPlist.strings in Contents/Resources/<lang>.lproj
  2. CFBundleDisplayName / CFBundleName from Contents/Info.plist
  3. the bundle file name without ".app"
"""

import os
import plistlib
from pathlib import Path
from typing import Iterable, Optional
from xml.parsers.expat import ExpatError

from loguru import logger

from quickgrid.models import Catalog, Item
from quickgrid.search.keys import make_item

DEFAULT_ROOTS = [
    "/Applications",
    "/System/Applications",
    "~/Applications",
]

_NAME_KEYS = ("CFBundleDisplayName", "CFBundleName")

# macOS names its Chinese localizations by script, not region
_LPROJ_ALIASES = {
    "zh_CN": "zh-Hans",
    "zh_SG": "zh-Hans",
    "zh_TW": "zh-Hant",
    "zh_HK": "zh-Hant",
}


def preferred_languages(lang: Optional[str] = None) -> list[str]:
    """
    Build the list of .lproj names to try, most preferred first.

    Args:
        lang: Locale string such as "zh_CN.UTF-8". Defaults to $LANG.

    Returns:
        Candidate localization directory names, ending with English/Base
    """
    if lang is None:
        lang = os.environ.get("LANG", "")

    locale = lang.split(".")[0].split("@")[0]
    candidates = []
    if locale and locale not in ("C", "POSIX"):
        if locale in _LPROJ_ALIASES:
            candidates.append(_LPROJ_ALIASES[locale])
        candidates.append(locale)
        candidates.append(locale.split("_")[0])

    for fallback in ("en", "English", "Base"):
        candidates.append(fallback)

    # Dedupe, keep order
    return list(dict.fromkeys(candidates))


def _read_plist(path: Path) -> dict:
    """Load a plist (XML or binary). Anything unreadable yields {}."""
    try:
        with open(path, "rb") as f:
            data = plistlib.load(f)
    except (OSError, ValueError, ExpatError, plistlib.InvalidFileException) as e:
        # Old-style text .strings files are not plists; that is expected
        logger.debug(f"Skipping unreadable plist {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _pick_name(data: dict) -> Optional[str]:
    for key in _NAME_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def resolve_display_name(bundle: Path, languages: Iterable[str] = ()) -> str:
    """
    Resolve the name shown for a bundle.

    Args:
        bundle: Path to the .app directory
        languages: .lproj names to try for a localized name

    Returns:
        The first name found along the fallback chain. Never fails.
    """
    resources = bundle / "Contents" / "Resources"
    for language in languages:
        strings = resources / f"{language}.lproj" / "InfoPlist.strings"
        if strings.is_file():
            name = _pick_name(_read_plist(strings))
            if name:
                return name

    info = bundle / "Contents" / "Info.plist"
    if info.is_file():
        name = _pick_name(_read_plist(info))
        if name:
            return name

    return bundle.name[:-len(".app")] if bundle.name.endswith(".app") else bundle.name


def _iter_bundles(root: Path):
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        logger.debug(f"Skipping scan root {root}: {e}")
        return

    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.suffix == ".app" and entry.is_dir():
            yield entry


def scan_applications(
    roots: Iterable[str] = DEFAULT_ROOTS,
    languages: Optional[Iterable[str]] = None,
) -> list[Item]:
    """
    Enumerate launchable apps under roots.

    Args:
        roots: Directories to scan; "~" is expanded
        languages: .lproj candidates, defaults to preferred_languages()

    Returns:
        Items sorted by display name, one per bundle path
    """
    languages = list(languages) if languages is not None else preferred_languages()

    found = []
    for root in roots:
        root_path = Path(root).expanduser()
        for bundle in _iter_bundles(root_path):
            name = resolve_display_name(bundle, languages)
            found.append(make_item(str(bundle), name))

    catalog = Catalog(found)
    logger.debug(f"Scanned {len(catalog)} applications")
    return list(catalog.items)
