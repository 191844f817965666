class SpotFeedError(Exception): ...


class SourceUnavailable(SpotFeedError): ...


class EmptyData(SpotFeedError): ...


class TimestampUnparseable(SpotFeedError): ...


class WriteFailure(SpotFeedError): ...


class ConfigError(SpotFeedError): ...


def require(condition: bool, message: str, exc: type[SpotFeedError] = SpotFeedError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
