from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationInvalid


class CircuitBreakerSettings(BaseModel):
    """Count-based circuit breaker tuning."""

    failure_rate_threshold: int = Field(default=50, ge=1, le=100)
    ring_buffer_size_in_closed_state: int = Field(default=100, ge=1)
    ring_buffer_size_in_half_open_state: int = Field(default=10, ge=1)
    wait_duration_in_open_state: float = Field(default=10.0, gt=0)


class RetrySettings(BaseModel):
    """Retry tuning; a multiplier of 1.0 means a fixed wait between attempts."""

    max_attempts: int = Field(default=3, ge=1)
    wait_duration: float = Field(default=0.05, ge=0)
    backoff_multiplier: float = Field(default=1.0, ge=1.0)
    max_wait_duration: float = Field(default=5.0, gt=0)


class ExecutorSettings(BaseModel):
    """Bounded worker pool dedicated to one external dependency."""

    max_workers: int = Field(default=10, ge=1)
    queue_size: int = Field(default=100, ge=0)


class Settings(BaseSettings):
    """Vonage sender settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="VONAGE_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = "verification-sender"
    log_level: str = "INFO"

    # Credentials
    api_key: str
    api_secret: str

    # Numbers and hosts
    numbers: list[str]
    local_domain: str
    sender_id: str = "Verify"  # Alpha sender ID, only honoured in some countries
    base_uri_sms: str = "https://rest.nexmo.com"

    # Fault tolerance
    circuit_breaker: CircuitBreakerSettings = Field(default_factory=CircuitBreakerSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    executor: ExecutorSettings = Field(default_factory=ExecutorSettings)

    @field_validator("api_key", "api_secret", "local_domain", "sender_id", "base_uri_sms")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("numbers")
    @classmethod
    def _numbers_not_empty(cls, value: list[str]) -> list[str]:
        numbers = [n.strip() for n in value if n and n.strip()]
        if not numbers or len(numbers) != len(value):
            raise ValueError("must be a non-empty list of non-empty numbers")
        return numbers

    @property
    def voice_uri(self) -> str:
        return f"https://{self.local_domain}/v1/calls"

    @property
    def sms_uri(self) -> str:
        return f"{self.base_uri_sms.rstrip('/')}/sms/json"


def load_settings(**overrides) -> Settings:
    """
    Load and validate settings.

    Args:
        **overrides: Field values taking precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigurationInvalid: If any field is missing, empty or malformed
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationInvalid(f"Invalid Vonage configuration: {', '.join(fields)}") from e
