import os


def GetEnv(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def ReadIntEnv(name: str, default: int) -> int:
    raw = GetEnv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def ReadBoolEnv(name: str, default: bool = False) -> bool:
    raw = GetEnv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


class WeekplanSettings:
    """Environment backed settings, read on every access so tests can monkeypatch."""

    @property
    def DatabaseUrl(self) -> str | None:
        return GetEnv("DATABASE_URL")

    @property
    def PoolSize(self) -> int:
        return ReadIntEnv("SQLALCHEMY_POOL_SIZE", 10)

    @property
    def MaxOverflow(self) -> int:
        return ReadIntEnv("SQLALCHEMY_MAX_OVERFLOW", 20)

    @property
    def PoolTimeout(self) -> int:
        return ReadIntEnv("SQLALCHEMY_POOL_TIMEOUT", 60)

    @property
    def JwtSecretKey(self) -> str | None:
        return GetEnv("JWT_SECRET_KEY")

    @property
    def RandomizeDefaultCount(self) -> int:
        return ReadIntEnv("PLAN_RANDOMIZE_DEFAULT_COUNT", 3)

    @property
    def AllowedOrigins(self) -> list[str]:
        raw = GetEnv("ALLOWED_ORIGINS", "") or ""
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def RunMigrationsOnStartup(self) -> bool:
        return ReadBoolEnv("RUN_MIGRATIONS_ON_STARTUP")


Settings = WeekplanSettings()
