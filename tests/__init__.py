"""
Media Showcase Test Suite

Test organization:
- test_image_cache.py: Coalescing, freshness, eviction, expiry and clear
- test_eviction.py: LRU victim selection
- test_cache_admin.py: Token check and status/clear payloads
- test_cache_routes.py: /api/cache/* endpoints
- test_pages.py: Home, gallery and inspiration pages
- test_cloudinary_client.py: Cloudinary admin API client
- test_content_service.py: content.json loading and validation
- conftest.py: Shared fixtures and test utilities
"""
