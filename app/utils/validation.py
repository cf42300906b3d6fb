from functools import wraps
from flask import current_app, request, jsonify


def normalize_city(raw: str) -> str:
    """Collapse inner whitespace and strip the ends."""
    return " ".join((raw or "").split())


def cache_key(city: str) -> str:
    """Cache key for a city, case-insensitive"""
    return normalize_city(city).casefold()


def validate_city(f):
    """
    Декоратор для проверки параметра city в запросе.
    Проверяет наличие параметра и его длину.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        city = normalize_city(request.args.get('city', default='', type=str))

        if not city:
            return jsonify({"error": "City parameter is required"}), 400

        max_length = current_app.config.get('MAX_CITY_LENGTH', 100)
        if len(city) > max_length:
            return jsonify({
                "error": "Invalid city parameter",
                "details": f"Must be at most {max_length} characters"
            }), 400

        return f(*args, **kwargs)

    return wrapper
