"""Service-layer errors. Routes translate them into HTTP status codes."""


class ServiceError(ValueError):
    status_code = 400


class ValidationFailed(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409
