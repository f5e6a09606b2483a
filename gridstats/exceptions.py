class GridStatsError(Exception): ...


class NetworkError(GridStatsError): ...


class ParseError(GridStatsError): ...


class ValidationError(GridStatsError): ...


class ConfigError(GridStatsError): ...


def require(condition: bool, message: str, exc: type[GridStatsError] = GridStatsError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
