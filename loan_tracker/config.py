"""Configuration management for loan-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from loan_tracker.exceptions import ConfigurationError

UNKNOWN_CLIENT_LABEL = "Cliente Desconhecido"


@dataclass
class StorageConfig:
    """JSON record store configuration."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False


@dataclass
class ReportConfig:
    """Dashboard and profit report configuration."""

    history_months: int = 6
    upcoming_limit: int = 5
    trailing_days: int = 30
    unknown_client_label: str = UNKNOWN_CLIENT_LABEL


@dataclass
class LoanTrackerConfig:
    """Main configuration for loan-tracker."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "LoanTrackerConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            data_dir=Path(os.getenv("LOAN_TRACKER_DATA_DIR", "data")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        report = ReportConfig(
            history_months=_env_int("HISTORY_MONTHS", 6),
            upcoming_limit=_env_int("UPCOMING_LIMIT", 5),
            trailing_days=_env_int("TRAILING_DAYS", 30),
            unknown_client_label=os.getenv("UNKNOWN_CLIENT_LABEL", UNKNOWN_CLIENT_LABEL),
        )

        seed = os.getenv("SEED")

        return cls(
            storage=storage,
            report=report,
            seed=_env_int("SEED", 0) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
