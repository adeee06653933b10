"""
Tests for API decorators
"""
import pytest
from unittest.mock import patch
from quart import Quart

from core.image_cache import ImageCache
from services.cache_admin import CacheAdmin
from utils.decorators import api_handler, require_cache_token

from tests.conftest import FakeProvider


@pytest.fixture
def app():
    """Create a test Quart app with a cache admin registered."""
    app = Quart(__name__)
    app.config['TESTING'] = True
    app.extensions['cache_admin'] = CacheAdmin(ImageCache(FakeProvider()), 'right-token')
    return app


class TestApiHandlerDecorator:
    """Test @api_handler decorator."""

    @pytest.mark.asyncio
    async def test_successful_response_wrapping(self, app):
        """Test that dict responses are auto-wrapped with success=True."""
        @api_handler()
        async def test_endpoint():
            return {"data": "value", "count": 10}

        async with app.app_context():
            result = await test_endpoint()
            data = await result.get_json()

            assert data["success"] is True
            assert data["data"] == "value"
            assert data["count"] == 10

    @pytest.mark.asyncio
    async def test_successful_response_with_existing_success(self, app):
        """Test that existing success key is preserved."""
        @api_handler()
        async def test_endpoint():
            return {"success": False, "data": "value"}

        async with app.app_context():
            result = await test_endpoint()
            data = await result.get_json()

            assert data["success"] is False

    @pytest.mark.asyncio
    async def test_value_error_returns_400(self, app):
        @api_handler()
        async def test_endpoint():
            raise ValueError("Invalid input")

        async with app.app_context():
            response, status_code = await test_endpoint()
            data = await response.get_json()

            assert status_code == 400
            assert data == {"success": False, "error": "Invalid input"}

    @pytest.mark.asyncio
    async def test_permission_error_returns_403(self, app):
        @api_handler()
        async def test_endpoint():
            raise PermissionError("Access denied")

        async with app.app_context():
            response, status_code = await test_endpoint()
            assert status_code == 403

    @pytest.mark.asyncio
    async def test_file_not_found_error_returns_404(self, app):
        @api_handler()
        async def test_endpoint():
            raise FileNotFoundError("Gallery not found")

        async with app.app_context():
            response, status_code = await test_endpoint()
            data = await response.get_json()

            assert status_code == 404
            assert data["error"] == "Gallery not found"

    @pytest.mark.asyncio
    async def test_generic_exception_returns_500(self, app):
        @api_handler()
        async def test_endpoint():
            raise RuntimeError("Unexpected error")

        async with app.app_context():
            response, status_code = await test_endpoint()
            data = await response.get_json()

            assert status_code == 500
            assert data["error"] == "Unexpected error"

    @pytest.mark.asyncio
    async def test_non_dict_response_passed_through(self, app):
        """Test that non-dict responses are passed through unchanged."""
        @api_handler()
        async def test_endpoint():
            from quart import jsonify
            return jsonify({"custom": "response"}), 201

        async with app.app_context():
            result = await test_endpoint()
            assert isinstance(result, tuple)
            assert result[1] == 201

    @pytest.mark.asyncio
    async def test_log_errors_disabled(self, app):
        """Test that log_errors=False suppresses error logging."""
        @api_handler(log_errors=False)
        async def test_endpoint():
            raise ValueError("Error without logging")

        async with app.app_context():
            with patch('utils.decorators.logger') as mock_logger:
                await test_endpoint()
                mock_logger.exception.assert_not_called()


class TestRequireCacheTokenDecorator:
    """Test @require_cache_token decorator."""

    @pytest.mark.asyncio
    async def test_valid_token_passes_through(self, app):
        @require_cache_token
        async def test_endpoint():
            return {"data": "protected"}

        headers = {'Authorization': 'Bearer right-token'}
        async with app.test_request_context('/', headers=headers):
            result = await test_endpoint()
            assert result == {"data": "protected"}

    @pytest.mark.asyncio
    async def test_wrong_token_rejected_with_challenge(self, app):
        @require_cache_token
        async def test_endpoint():
            return {"data": "protected"}

        headers = {'Authorization': 'Bearer wrong-token'}
        async with app.test_request_context('/', headers=headers):
            response, status_code = await test_endpoint()
            data = await response.get_json()

            assert status_code == 401
            assert data["error"] == "Unauthorized"
            assert response.headers['WWW-Authenticate'] == 'Bearer realm="Cache API"'

    @pytest.mark.asyncio
    async def test_missing_header_rejected(self, app):
        @require_cache_token
        async def test_endpoint():
            return {"data": "protected"}

        async with app.test_request_context('/'):
            response, status_code = await test_endpoint()
            assert status_code == 401

    @pytest.mark.asyncio
    async def test_unconfigured_secret_rejects_everyone(self, app):
        app.extensions['cache_admin'] = CacheAdmin(ImageCache(FakeProvider()), '')

        @require_cache_token
        async def test_endpoint():
            return {"data": "protected"}

        headers = {'Authorization': 'Bearer '}
        async with app.test_request_context('/', headers=headers):
            response, status_code = await test_endpoint()
            assert status_code == 401

    @pytest.mark.asyncio
    async def test_combined_with_api_handler(self, app):
        """The route stacking order: api_handler wraps the token check."""
        @api_handler()
        @require_cache_token
        async def test_endpoint():
            return {"data": "value"}

        headers = {'Authorization': 'Bearer right-token'}
        async with app.test_request_context('/', headers=headers):
            result = await test_endpoint()
            data = await result.get_json()

            assert data == {"success": True, "data": "value"}
