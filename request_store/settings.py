import os
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from request_store.core.request_state import FailurePolicy

# Load .env file variables into environment
load_dotenv(verbose=True)


class Settings:
    """Request store configuration settings loaded from environment variables."""

    # --- Provider Settings ---
    REQUEST_STORE_BASE_URL: Optional[str] = None
    REQUEST_STORE_TIMEOUT: float = 30.0

    # --- State Settings ---
    REQUEST_STORE_FAILURE_POLICY: str = FailurePolicy.CLEAR_INITIAL.value

    def get_base_url(self) -> Optional[str]:
        """Returns the base URL used by the HTTP provider, if set."""
        url = os.getenv("REQUEST_STORE_BASE_URL")
        if url:
            parsed = urlparse(url)
            if not all([parsed.scheme, parsed.netloc]):
                raise ValueError(f"Invalid REQUEST_STORE_BASE_URL format: {url}")
        return url

    def get_timeout(self) -> float:
        """Returns the HTTP provider timeout in seconds."""
        raw = os.getenv("REQUEST_STORE_TIMEOUT", str(self.REQUEST_STORE_TIMEOUT))
        try:
            timeout = float(raw)
        except ValueError:
            raise ValueError("REQUEST_STORE_TIMEOUT environment variable must be a number.")
        if timeout <= 0:
            raise ValueError("REQUEST_STORE_TIMEOUT environment variable must be positive.")
        return timeout

    def get_failure_policy(self) -> FailurePolicy:
        """Returns how a failed fetch treats the `initial` flag."""
        raw = os.getenv("REQUEST_STORE_FAILURE_POLICY", self.REQUEST_STORE_FAILURE_POLICY).strip().lower()
        try:
            return FailurePolicy(raw)
        except ValueError:
            valid = ", ".join(policy.value for policy in FailurePolicy)
            raise ValueError(f"Invalid REQUEST_STORE_FAILURE_POLICY '{raw}'. Valid values are: {valid}")

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()
