import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./storage.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = bool(data.get("CORS_ALLOW_CREDENTIALS", False))
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Square (cards, saved cards, autopay)
    SQUARE_ENV = data.get("SQUARE_ENV", "sandbox")
    SQUARE_ACCESS_TOKEN = data.get("SQUARE_ACCESS_TOKEN", None)
    SQUARE_APPLICATION_ID = data.get("SQUARE_APPLICATION_ID", None)
    SQUARE_LOCATION_ID = data.get("SQUARE_LOCATION_ID", None)
    SQUARE_API_VERSION = data.get("SQUARE_API_VERSION", "2024-10-17")

    # PayPal (checkout orders)
    PAYPAL_ENV = data.get("PAYPAL_ENV", "sandbox")
    PAYPAL_CLIENT_ID = data.get("PAYPAL_CLIENT_ID", None)
    PAYPAL_CLIENT_SECRET = data.get("PAYPAL_CLIENT_SECRET", None)

    GATEWAY_TIMEOUT_SECONDS = float(data.get("GATEWAY_TIMEOUT_SECONDS", 15.0))
    GATEWAY_MAX_RETRIES = int(data.get("GATEWAY_MAX_RETRIES", 2))  # connect failures only

    # Autopay worker
    AUTOPAY_ENABLED = bool(data.get("AUTOPAY_ENABLED", True))
    AUTOPAY_INTERVAL_SECONDS = data.get("AUTOPAY_INTERVAL_SECONDS", 86400)  # Daily
    AUTOPAY_CHARGE_TIMEOUT_SECONDS = float(data.get("AUTOPAY_CHARGE_TIMEOUT_SECONDS", 30.0))

    INVOICE_DUE_DAY = data.get("INVOICE_DUE_DAY", 5)  # Day of month invoices fall due
    PAYMENTS_DEFAULT_LIMIT = data.get("PAYMENTS_DEFAULT_LIMIT", 100)
    PAYMENTS_MAX_LIMIT = data.get("PAYMENTS_MAX_LIMIT", 500)
