class StorageError(Exception):
    """Base class for errors raised by store implementations"""
    pass


class RecordNotFound(StorageError):
    """No row matches the lookup key"""
    pass


class DuplicateRecord(StorageError):
    """A row with the same key already exists"""
    pass


class InvalidReference(StorageError):
    """A foreign key points at a row that does not exist"""
    pass


FOREIGN_KEY_SQLSTATE = "23503"
UNIQUE_SQLSTATE = "23505"


def _sqlstate(exc: BaseException):
    orig = getattr(exc, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return code
    return None


def translate_integrity_error(exc: BaseException) -> StorageError:
    """Map a driver IntegrityError onto the storage sentinels (postgres or sqlite)"""
    code = _sqlstate(exc)
    text = str(getattr(exc, "orig", exc)).lower()
    if code == FOREIGN_KEY_SQLSTATE or "foreign key" in text:
        return InvalidReference(str(exc))
    if code == UNIQUE_SQLSTATE or "unique" in text or "duplicate" in text:
        return DuplicateRecord(str(exc))
    return StorageError(str(exc))
