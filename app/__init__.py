from datetime import timedelta

from flask import Flask, jsonify

from .extensions import limiter
from .routes import weather_bp
from .services.weather_api import build_weather_source
from .utils.cache import WeatherCache


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found_handler(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed_handler(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({
            "error": "Rate limit exceeded",
            "message": str(e.description)
        }), 429

    @app.errorhandler(500)
    def internal_error_handler(e):
        return jsonify({"error": "Internal server error"}), 500


def create_app(test_config=None, cache=None, source=None):
    """
    Application factory.

    The cache and the data source are created once here and shared by all
    requests through app.extensions; tests can inject their own.
    """
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)
    # the shared limiter keeps the last app's flag unless every app sets it
    app.config.setdefault('RATELIMIT_ENABLED', True)

    if cache is None:
        cache = WeatherCache(
            max_size=app.config['MAX_CACHE_SIZE'],
            ttl=timedelta(minutes=app.config['CACHE_TTL_MINUTES'])
        )
    if source is None:
        source = build_weather_source(app.config)

    app.extensions['weather_cache'] = cache
    app.extensions['weather_source'] = source

    limiter.init_app(app)

    # Регистрация Blueprint
    app.register_blueprint(weather_bp)
    register_error_handlers(app)

    app.logger.info(
        f"Weather service configured: source={source.name}, "
        f"max_size={cache.max_size}, ttl={cache.ttl}"
    )

    return app
