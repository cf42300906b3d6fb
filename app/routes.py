import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from app.extensions import limiter
from app.services.weather_api import WeatherFetchError
from app.utils.validation import cache_key, normalize_city, validate_city

weather_bp = Blueprint('weather', __name__)


def get_cache():
    return current_app.extensions['weather_cache']


def get_source():
    return current_app.extensions['weather_source']


def _weather_rate_limit():
    return current_app.config.get('WEATHER_RATE_LIMIT', '10 per minute')


@weather_bp.route('/weather', methods=['GET'])
@validate_city
@limiter.limit(_weather_rate_limit)
def get_weather():
    start_time = time.time()
    request_id = f"req-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S-%f')}"

    city = normalize_city(request.args.get('city'))
    key = cache_key(city)
    cache = get_cache()

    current_app.logger.info(f"Incoming request {request_id} from {request.remote_addr} for '{city}'")

    try:
        record, from_cache = cache.lookup(key)
        if from_cache:
            current_app.logger.debug(f"Cache hit for '{key}' in request {request_id}")
        else:
            current_app.logger.debug(f"Cache miss for '{key}' in request {request_id}")
            # fetched without holding the cache lock
            record = get_source().fetch(city)
            cache.insert(key, record)

        result = {
            'request_id': request_id,
            **record.to_dict(),
            # entries are shared across spellings; echo the caller's
            'city': city,
            'data_source': get_source().name,
            'processing_time_sec': time.time() - start_time,
            'cache_info': {
                'used_cache': from_cache,
                'cache_expires': (datetime.now(timezone.utc) + cache.ttl).isoformat()
                if not from_cache else None,
                'cache_ttl_minutes': cache.ttl.total_seconds() / 60
            }
        }

        current_app.logger.info(f"Successful response for request {request_id}")
        return jsonify(result)

    except WeatherFetchError as e:
        current_app.logger.error(f"Weather fetch failed in request {request_id}: {e}")
        return jsonify({
            'error': 'Failed to fetch weather data',
            'details': str(e),
            'request_id': request_id
        }), 502

    except Exception as e:
        current_app.logger.error(f"Unexpected error in request {request_id}", exc_info=True)
        return jsonify({
            'error': 'Internal server error',
            'request_id': request_id,
            'details': str(e)
        }), 500


@weather_bp.route('/health')
def health_check():
    cache = get_cache()
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cache_size": cache.size(),
        "cache_max_size": cache.max_size,
        "data_source": get_source().name
    })


@weather_bp.route('/docs')
def api_docs():
    return jsonify({
        "endpoints": {
            "/weather": {
                "description": "Get current weather for a city",
                "parameters": {
                    "city": "City name (required)"
                },
                "rate_limit": _weather_rate_limit()
            },
            "/health": {
                "description": "Service health check"
            },
            "/docs": {
                "description": "API documentation"
            }
        }
    })
