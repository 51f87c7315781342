"""
Validation errors raised for Hotel records.

Every error here is a mongoengine.ValidationError, so code that already
catches MongoEngine's error keeps working. The subclasses tell callers *why*
a single field was rejected; HotelValidationError collects them per field path.
"""
from typing import Dict

import mongoengine

# Message MongoEngine uses when a required field is None.
REQUIRED_MESSAGE = 'Field is required'


class HotelFieldError(mongoengine.ValidationError):
    """A single rejected field. `field_path` is dotted, e.g. 'owner.email'."""

    def __init__(self, message='', field_path=None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_path = field_path or self.field_name


class RequiredFieldMissing(HotelFieldError):
    pass


class PatternMismatch(HotelFieldError):
    pass


class InvalidEnumValue(HotelFieldError):
    pass


class ReferenceUnresolved(HotelFieldError):
    pass


"""
Raised when a Hotel fails validation as a whole.

`problems` maps each offending field path to its HotelFieldError. The same
mapping is stored in `errors`, so MongoEngine's to_dict() still works.
"""
class HotelValidationError(mongoengine.ValidationError):

    def __init__(self, message='', problems: Dict[str, HotelFieldError] = None):
        super().__init__(message, errors=problems or {})

    @property
    def problems(self) -> Dict[str, HotelFieldError]:
        return self.errors

    @classmethod
    def from_error(cls, error: mongoengine.ValidationError) -> 'HotelValidationError':
        problems = dict(_collect(error.errors or {}))
        paths = ', '.join(f'{path}: {err}' for path, err in problems.items())
        return cls(f'{error.message}[{paths}]', problems)


# MongoEngine nests embedded document errors as plain dicts (or as
# ValidationErrors carrying their own `errors`); flatten them to dotted paths.
def _collect(errors, prefix=''):
    for name, error in errors.items():
        path = prefix + name
        if isinstance(error, dict):
            yield from _collect(error, path + '.')
        elif isinstance(error, mongoengine.ValidationError) and error.errors:
            yield from _collect(error.errors, path + '.')
        else:
            yield path, _classify(path, error)


def _classify(path, error) -> HotelFieldError:
    if isinstance(error, HotelFieldError):
        error.field_path = path
        return error

    message = getattr(error, 'message', None) or str(error)
    if message == REQUIRED_MESSAGE:
        return RequiredFieldMissing(message, field_path=path, field_name=path.split('.')[-1])

    return HotelFieldError(message, field_path=path, field_name=path.split('.')[-1])
