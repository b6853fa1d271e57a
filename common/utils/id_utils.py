from bson import ObjectId
from bson.errors import InvalidId

from common.enum.error_code import APIError
from common.exception.exceptions import ValidationError


def to_object_id(value, error_enum: APIError = APIError.INVALID_ID_FORMAT) -> ObjectId:
    if isinstance(value, ObjectId):
        return value

    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(error_enum)

    try:
        return ObjectId(value)
    except InvalidId:
        raise ValidationError(error_enum)


def to_object_ids(values, error_enum: APIError = APIError.INVALID_ID_FORMAT) -> list:
    return [to_object_id(v, error_enum) for v in values]


def id_str(value):
    return str(value) if value is not None else None
