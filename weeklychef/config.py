import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./weeklychef.db")

# Stripe Configuration
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET")
STRIPE_CURRENCY = os.getenv("STRIPE_CURRENCY", "eur")
# Tolerance (seconds) for the timestamp embedded in the Stripe-Signature header
STRIPE_WEBHOOK_TOLERANCE = int(os.getenv("STRIPE_WEBHOOK_TOLERANCE", "300"))

if not STRIPE_WEBHOOK_SECRET:
    import warnings

    warnings.warn(
        "STRIPE_WEBHOOK_SECRET not set! Payment webhooks will be rejected until configured",
        RuntimeWarning,
        stacklevel=2,
    )

# Public site used to build Stripe success/cancel redirects
PUBLIC_SITE_URL = os.getenv("PUBLIC_SITE_URL", "http://localhost:4321").rstrip("/")

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv(
    "EMAIL_FROM_ADDRESS", "Weekly Private Chef <info@weeklyprivatechef.com>"
)
EMAIL_SYSTEM_ADDRESS = os.getenv(
    "EMAIL_SYSTEM_ADDRESS", "Weekly Private Chef System <sistema@weeklyprivatechef.com>"
)
ORGANIZER_EMAIL = os.getenv("ORGANIZER_EMAIL", "bookings@weeklyprivatechef.com")

# Twilio Configuration (SMS + WhatsApp)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_FROM_NUMBER = os.getenv("TWILIO_FROM_NUMBER")
TWILIO_WHATSAPP_NUMBER = os.getenv("TWILIO_WHATSAPP_NUMBER", "whatsapp:+14155238886")  # Twilio sandbox
ORGANIZER_PHONE = os.getenv("ORGANIZER_PHONE")
# "whatsapp" or "sms" for customer confirmations; the organizer always gets WhatsApp
CUSTOMER_MESSAGE_CHANNEL = os.getenv("CUSTOMER_MESSAGE_CHANNEL", "whatsapp")
# Prepended to numbers written without an international prefix
DEFAULT_COUNTRY_CODE = os.getenv("DEFAULT_COUNTRY_CODE", "+39")

# Checkout policy
PRICE_CHECK_ENABLED = _env_flag("PRICE_CHECK_ENABLED", "true")
PRICE_TOLERANCE_CENTS = int(os.getenv("PRICE_TOLERANCE_CENTS", "0"))
STRICT_PLAN_PARSING = _env_flag("STRICT_PLAN_PARSING", "false")

# Guards the manual repair/test endpoints; unset leaves them open (development only)
ADMIN_API_TOKEN = os.getenv("ADMIN_API_TOKEN")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "https://weeklyprivatechef.com,https://www.weeklyprivatechef.com,http://localhost:4321",
).split(",")
