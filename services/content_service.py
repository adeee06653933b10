"""
Site content loading.

content.json holds the owner bio, navigation, gallery definitions (each bound
to a Cloudinary tag), inspiration links and theme colours. It is re-read on
every request so edits go live without a restart.
"""

import copy
import json
import re
from typing import List, Optional

from utils.logging_config import get_logger

logger = get_logger('Content')

HEX_COLOR_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')
THEME_KEYS = ('primaryColor', 'backgroundColor', 'textColor', 'accentColor')
REQUIRED_KEYS = ('site', 'navigation', 'galleries', 'inspiration', 'theme')

DEFAULT_CONTENT = {
    "site": {
        "title": "Media Showcase",
        "description": "Personal gallery",
        "owner": {
            "name": "Owner",
            "bio": "Welcome to my portfolio",
        },
    },
    "navigation": [
        {"id": "home", "title": "Home", "path": "/"},
    ],
    "galleries": [],
    "inspiration": {
        "title": "Inspiration",
        "description": "Content that inspires",
        "sections": [],
    },
    "theme": {
        "primaryColor": "#2563eb",
        "backgroundColor": "#000000",
        "textColor": "#ffffff",
        "accentColor": "#3b82f6",
    },
}


def default_content() -> dict:
    return copy.deepcopy(DEFAULT_CONTENT)


def load_content(path: str) -> dict:
    """
    Read the content file, falling back to the built-in default.

    A missing or unparsable file is logged and never raised, so a broken edit
    to content.json still leaves the site up.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Content file not found: {path}, using default content")
        return default_content()
    except (OSError, ValueError) as e:
        logger.error(f"Error loading {path}: {e}")
        return default_content()

    if not isinstance(content, dict):
        logger.error(f"Error loading {path}: top level must be an object")
        return default_content()

    # Fill missing top-level sections so templates can rely on them
    for key, value in DEFAULT_CONTENT.items():
        content.setdefault(key, copy.deepcopy(value))
    if isinstance(content['site'], dict):
        content['site'].setdefault('owner', copy.deepcopy(DEFAULT_CONTENT['site']['owner']))
        content['site']['owner'].setdefault('name', DEFAULT_CONTENT['site']['owner']['name'])
    return content


def validate_content(content: dict) -> List[str]:
    """Return a list of problems with a content document (empty when valid)."""
    problems = []

    for key in REQUIRED_KEYS:
        if key not in content:
            problems.append(f"Missing section: {key}")

    site = content.get('site')
    if not isinstance(site, dict):
        site = {}
    if not site.get('title'):
        problems.append("site.title is required")
    if not isinstance(site.get('owner'), dict):
        problems.append("site.owner is required")

    navigation = content.get('navigation') or []
    if not navigation or navigation[0].get('id') != 'home' or navigation[0].get('path') != '/':
        problems.append("navigation must start with the home entry ('/')")

    seen_ids = set()
    for gallery in content.get('galleries') or []:
        gallery_id = gallery.get('id')
        if not gallery_id:
            problems.append("Every gallery needs an id")
        elif gallery_id in seen_ids:
            problems.append(f"Duplicate gallery id: {gallery_id}")
        seen_ids.add(gallery_id)
        if not gallery.get('cloudinaryTag'):
            problems.append(f"Gallery {gallery_id!r} has no cloudinaryTag")

    theme = content.get('theme') or {}
    for key in THEME_KEYS:
        if not HEX_COLOR_RE.match(str(theme.get(key, ''))):
            problems.append(f"theme.{key} must be a #RRGGBB colour")

    return problems


def find_gallery(content: dict, path: str) -> Optional[dict]:
    """Gallery whose route (/<id>) matches the request path."""
    for gallery in content.get('galleries') or []:
        if f"/{gallery.get('id')}" == path:
            return gallery
    return None


def split_bio(bio: str) -> List[str]:
    """Bio paragraphs are separated by '|'."""
    return [p.strip() for p in (bio or '').split('|') if p.strip()]


def flatten_inspiration(content: dict) -> List[dict]:
    """All inspiration items across sections, in order."""
    sections = (content.get('inspiration') or {}).get('sections') or []
    return [item for section in sections for item in section.get('items') or []]
