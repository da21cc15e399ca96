"""
Application configuration.
All settings are loaded from environment variables.
Use .env.example as a reference for required variables.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    IMPORTANT: Credentials have no defaults - they MUST be set in .env file.
    """

    # ===========================================
    # APPLICATION
    # ===========================================
    app_env: str = "local"
    # CORS: comma-separated (e.g. http://localhost:3000,https://shop.example.com). Empty = default list in code.
    cors_origins: str = ""
    # Trusted proxy IPs (comma-separated). Used for X-Forwarded-For in production.
    trusted_proxy_ips: str = ""

    # ===========================================
    # DATABASE
    # ===========================================
    database_url: str  # Required, no default
    # Create missing tables on startup (local/dev). Production uses migrations.
    db_auto_create: bool = False

    # ===========================================
    # REDIS
    # ===========================================
    redis_url: str = "redis://localhost:6379/0"

    # ===========================================
    # AUTH (JWT)
    # ===========================================
    jwt_secret_key: str  # Required, no default
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Login rate limit (brute-force protection)
    login_rate_limit_attempts: int = 5
    login_rate_limit_window_seconds: int = 900  # 15 min

    # ===========================================
    # PAYMENTS (Razorpay)
    # ===========================================
    razorpay_key_id: str  # Required, no default
    razorpay_key_secret: str  # Required, no default (also the signature secret)
    razorpay_api_base: str = "https://api.razorpay.com/v1"
    payment_currency: str = "INR"
    provider_timeout: float = 10.0
    # What to do with requested course ids missing from the catalog: drop | reject
    order_unknown_course_policy: str = "drop"

    # ===========================================
    # CIRCUIT BREAKER
    # ===========================================
    cb_failure_threshold: int = 5
    cb_open_seconds: int = 30
    cb_storage: str = "redis"  # redis | memory

    # ===========================================
    # LOGGING
    # ===========================================
    log_level: str = "INFO"
    request_id_header: str = "X-Request-Id"
    log_file: str | None = None
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @property
    def trusted_proxy_ips_set(self) -> set[str]:
        """Get trusted proxy IPs as a set."""
        return {ip.strip() for ip in self.trusted_proxy_ips.split(",") if ip.strip()}

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Ensure token secret is reasonably secure."""
        if len(v) < 16:
            raise ValueError("jwt_secret_key must be at least 16 characters")
        if v in ("changeme", "secret", "password"):
            raise ValueError("jwt_secret_key is too weak, please change it")
        return v

    @field_validator("order_unknown_course_policy")
    @classmethod
    def validate_unknown_course_policy(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("drop", "reject"):
            raise ValueError("order_unknown_course_policy must be 'drop' or 'reject'")
        return v

    @field_validator("cb_storage")
    @classmethod
    def validate_cb_storage(cls, v: str) -> str:
        v = v.lower().strip()
        if v not in ("redis", "memory"):
            raise ValueError("cb_storage must be 'redis' or 'memory'")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # ignore unknown keys from .env


settings = Settings()
