"""Errors raised by the route planning engine."""


class MetroPlannerError(Exception):
    """Base error carrying a machine readable code."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class StationNotFound(MetroPlannerError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Station not found: {name}", code="STATION_NOT_FOUND")


class PolicyMissing(MetroPlannerError):
    def __init__(self, message: str = "Fare policy not found"):
        super().__init__(message, code="FARE_POLICY_MISSING")


class DatasetError(MetroPlannerError):
    def __init__(self, message: str):
        super().__init__(message, code="INVALID_DATASET")
