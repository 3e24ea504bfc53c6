import re
from urllib.parse import urlsplit

DOMAIN_REGEX = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
    r"\.[a-zA-Z]{2,}$"
)
BLOCKED_HOSTS = {"localhost", "127.0.0.1"}


def normalize_business_url(url: str) -> str:
    """Prefix https:// when the user typed a bare domain."""
    url = (url or "").strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        return f"https://{url}"
    return url


def _hostname(url: str) -> str | None:
    try:
        return urlsplit(normalize_business_url(url)).hostname
    except ValueError:
        return None


def is_valid_business_url(url: str | None) -> bool:
    if not url or not url.strip():
        return False
    hostname = _hostname(url)
    if not hostname or len(hostname) < 3:
        return False
    if not DOMAIN_REGEX.match(hostname):
        return False
    if hostname in BLOCKED_HOSTS:
        return False
    return True


def validate_business_url(url: str) -> str:
    if not url or not url.strip():
        raise ValueError("Business URL is required")
    if not is_valid_business_url(url):
        raise ValueError("Please enter a valid website URL (e.g. example.com)")
    return url.strip()


def business_domain(url: str, default: str = "Magnetize") -> str:
    """Hostname without a leading www., used in outbound emails."""
    hostname = _hostname(url)
    if not hostname:
        return default
    return hostname.removeprefix("www.")
