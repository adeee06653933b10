import config
from quart import Quart
from dotenv import load_dotenv

load_dotenv(override=True)

from core.image_cache import ImageCache
from routers import main_blueprint, api_blueprint, static_blueprint
from services.cache_admin import CacheAdmin
from services.cloudinary_client import get_cloudinary
from services.content_service import load_content, validate_content
from utils.logging_config import setup_logging, get_logger


def create_app(image_provider=None):
    """
    Create and configure the Quart application.

    Args:
        image_provider: Source of tag image lists for the cache. Defaults to
            the configured Cloudinary client.
    """
    # Initialize logging first
    setup_logging(level=config.LOG_LEVEL)
    logger = get_logger('App')
    logger.info(f"Initializing {config.APP_NAME}...")

    app = Quart(__name__)

    for warning in config.validate_config():
        logger.warning(warning)
    log_content_problems(logger, config.CONTENT_FILE)

    cloudinary = get_cloudinary()
    image_cache = ImageCache(image_provider or cloudinary, **config.get_cache_config())

    app.extensions['cloudinary'] = cloudinary
    app.extensions['image_cache'] = image_cache
    app.extensions['cache_admin'] = CacheAdmin(image_cache, config.CACHE_API_KEY)

    @app.before_serving
    async def start_image_cache():
        image_cache.start()

    @app.after_serving
    async def stop_image_cache():
        await image_cache.shutdown()

    app.register_blueprint(static_blueprint)
    app.register_blueprint(main_blueprint)
    app.register_blueprint(api_blueprint, url_prefix='/api')

    return app


def log_content_problems(logger, path):
    """Warn about anything wrong in content.json. Pages still render with it."""
    problems = validate_content(load_content(path))
    for problem in problems:
        logger.warning(f"content.json: {problem}")
    return problems


def log_startup_banner(logger):
    content = load_content(config.CONTENT_FILE)
    base_url = f"http://localhost:{config.PORT}"

    logger.info(f"{content['site'].get('title', config.APP_NAME)} starting on {base_url}")
    logger.info(f"  {base_url}/ (Home)")
    for gallery in content.get('galleries') or []:
        logger.info(f"  {base_url}/{gallery.get('id')} ({gallery.get('title')})")
    logger.info(f"  {base_url}/inspo (Inspiration)")

    logger.info(f"Cloudinary cloud name: {config.CLOUDINARY_CLOUD_NAME or 'not set'}")
    if config.has_cloudinary_credentials():
        logger.info("Cloudinary credentials set - fetching real images by tag")
    else:
        logger.warning("Cloudinary credentials not set - using mock data")


if __name__ == '__main__':
    import uvicorn
    app = create_app()
    log_startup_banner(get_logger('App'))
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")
