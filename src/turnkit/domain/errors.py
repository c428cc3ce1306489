# domain/errors.py


class GuidancePreconditionError(ValueError):
    """Caller broke a contract. Fail fast; retrying with the same input is pointless."""


class InvalidCoordinateError(GuidancePreconditionError):
    pass


class AngleOutOfRangeError(GuidancePreconditionError):
    pass


class EmptyGeometryError(GuidancePreconditionError):
    pass
