"""
Configuration settings for the OpenTSDB metrics SDK.

Numeric settings are kept as raw environment strings and parsed by
create_client, so a malformed value surfaces as a ConfigError.
"""
import os

# Protocol limits
DEFAULT_BATCH_SIZE = 20
MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 1024
PUT_PATH = '/api/put'

# Server configuration
SERVER_URL = os.getenv('OPENTSDB_URL', 'http://localhost:4242')
AUTH_USERNAME = os.getenv('OPENTSDB_USERNAME', '')
AUTH_PASSWORD = os.getenv('OPENTSDB_PASSWORD', '')

# Buffer configuration
BATCH_SIZE = os.getenv('OPENTSDB_BATCH_SIZE', str(DEFAULT_BATCH_SIZE))  # metrics per flush

# HTTP client configuration
REQUEST_TIMEOUT = os.getenv('OPENTSDB_REQUEST_TIMEOUT')  # seconds, unset leaves it to requests
