import os

from dotenv import load_dotenv

load_dotenv()

WEATHER_SOURCE = os.getenv('WEATHER_SOURCE', 'simulated')
WEATHERSTACK_API_KEY = os.getenv('WEATHERSTACK_API_KEY')
WEATHERSTACK_URL = os.getenv('WEATHERSTACK_URL', 'http://api.weatherstack.com/current')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', 5))
SIMULATED_SEED = int(os.environ['SIMULATED_SEED']) if os.getenv('SIMULATED_SEED') else None

CACHE_TTL_MINUTES = int(os.getenv('CACHE_TTL_MINUTES', 30))
MAX_CACHE_SIZE = int(os.getenv('MAX_CACHE_SIZE', 100))
MAX_CITY_LENGTH = int(os.getenv('MAX_CITY_LENGTH', 100))

LOG_DIR = os.getenv('LOG_DIR', 'logs')

RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '2000 per day;100 per hour')
RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
WEATHER_RATE_LIMIT = os.getenv('WEATHER_RATE_LIMIT', '10 per minute')

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', 8080))
