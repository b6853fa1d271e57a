from common.enum.error_code import APIError

class BusinessError(Exception):
    def __init__(self, error_enum: APIError, message=None):
        self.error_enum = error_enum
        self.message = message if message else error_enum.message
        super().__init__(self.message)


class ValidationError(BusinessError):
    def __init__(self, error_enum: APIError = APIError.INVALID_INPUT_VALUE, message=None):
        super().__init__(error_enum, message)


class NotFoundError(BusinessError):
    pass


class ConflictError(BusinessError):
    def __init__(self, error_enum: APIError = APIError.DUPLICATE_RELATION, message=None):
        super().__init__(error_enum, message)


class StoreUnavailableError(BusinessError):
    def __init__(self, error_enum: APIError = APIError.STORE_UNAVAILABLE, message=None):
        super().__init__(error_enum, message)


class StoreTimeoutError(StoreUnavailableError):
    def __init__(self, error_enum: APIError = APIError.STORE_TIMEOUT, message=None):
        super().__init__(error_enum, message)
