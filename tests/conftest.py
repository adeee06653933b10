"""
Pytest fixtures and test configuration
"""
import pytest
import os
import sys
import json
import asyncio

# Set testing environment variables BEFORE importing app modules
os.environ['TESTING'] = 'true'

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from app import create_app
from core.image_cache import ImageCache
from services.cloudinary_client import CloudinaryError


TEST_CACHE_TOKEN = 'test-cache-token'


def make_images(tag, count):
    """Image records shaped like Cloudinary resources."""
    return [
        {
            'public_id': f"{tag}/photo_{i:02d}",
            'width': 800,
            'height': 600,
            'format': 'jpg',
        }
        for i in range(1, count + 1)
    ]


class FakeClock:
    """Manually advanced clock, in epoch seconds."""

    def __init__(self, start=0.0):
        self.now = float(start)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeProvider:
    """
    Stand-in for the Cloudinary client.

    - calls: every (tag, limit) requested
    - counts: per-tag image count to return (default 12)
    - gates: per-tag asyncio.Event that holds the fetch until set
    - fail: raise CloudinaryError instead of returning
    """

    def __init__(self, default_count=12):
        self.default_count = default_count
        self.counts = {}
        self.gates = {}
        self.calls = []
        self.fail = False

    def hold(self, tag):
        self.gates[tag] = asyncio.Event()
        return self.gates[tag]

    def calls_for(self, tag):
        return [c for c in self.calls if c[0] == tag]

    async def fetch_by_tag(self, tag, limit):
        self.calls.append((tag, limit))
        gate = self.gates.get(tag)
        if gate is not None:
            await gate.wait()
        if self.fail:
            raise CloudinaryError("Cloudinary API error: 503 Service Unavailable")
        return make_images(tag, self.counts.get(tag, self.default_count))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def cache(provider, clock):
    """ImageCache with default limits, fake provider and fake clock."""
    return ImageCache(provider, clock=clock)


@pytest.fixture
def sample_content():
    return {
        "site": {
            "title": "Test Showcase",
            "description": "Testing",
            "owner": {
                "name": "Tester",
                "bio": "Photographer and tinkerer. | Second paragraph here.",
                "quote": "Light is everything",
                "hobbies": ["film", "hiking"],
            },
        },
        "navigation": [
            {"id": "home", "title": "Home", "path": "/"},
            {"id": "street", "title": "Street", "path": "/street"},
            {"id": "inspo", "title": "Inspo", "path": "/inspo"},
        ],
        "galleries": [
            {
                "id": "street",
                "title": "Street",
                "description": "Candid moments",
                "cloudinaryTag": "street",
                "layout": "grid",
            },
        ],
        "inspiration": {
            "title": "Inspiration",
            "description": "Content that inspires",
            "sections": [
                {
                    "title": "Videos",
                    "items": [
                        {"title": "A Great Talk", "url": "https://example.com/talk", "type": "video",
                         "description": "12 min"},
                    ],
                },
                {
                    "title": "Sites",
                    "items": [
                        {"title": "Photo Blog", "url": "https://example.com/blog", "type": "website"},
                    ],
                },
            ],
        },
        "theme": {
            "primaryColor": "#2563eb",
            "backgroundColor": "#000000",
            "textColor": "#ffffff",
            "accentColor": "#3b82f6",
        },
    }


@pytest.fixture
def content_file(tmp_path, sample_content):
    path = tmp_path / 'content.json'
    path.write_text(json.dumps(sample_content), encoding='utf-8')
    return str(path)


@pytest.fixture
def app(provider, content_file, monkeypatch):
    """Quart app wired to the fake provider, with the cache token configured."""
    monkeypatch.setattr(config, 'CONTENT_FILE', content_file)
    monkeypatch.setattr(config, 'CACHE_API_KEY', TEST_CACHE_TOKEN)
    monkeypatch.setattr(config, 'CLOUDINARY_CLOUD_NAME', 'test-cloud')
    monkeypatch.setattr(config, 'CLOUDINARY_API_KEY', '')
    monkeypatch.setattr(config, 'CLOUDINARY_API_SECRET', '')

    app = create_app(image_provider=provider)
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Quart test client."""
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {'Authorization': f'Bearer {TEST_CACHE_TOKEN}'}
