from typing import Iterable, List, Union

from .errors import ConfigurationError
from .models import FileEntry, SortMethod

_SORT_KEYS = {
    SortMethod.FILENAME: lambda entry: entry.name,
    SortMethod.SIZE: lambda entry: entry.size,
    SortMethod.MODIFIED: lambda entry: entry.modified_time,
    SortMethod.FILETYPE: lambda entry: entry.kind.value,
}


def parse_sort_method(method: Union[str, SortMethod]) -> SortMethod:
    if isinstance(method, SortMethod):
        return method
    try:
        return SortMethod(str(method).upper())
    except ValueError as exc:
        raise ConfigurationError(f"Unknown sort method: {method!r}") from exc


def sort_entries(entries: Iterable[FileEntry], method: Union[str, SortMethod] = SortMethod.FILENAME,
                 descending: bool = False) -> List[FileEntry]:
    """Return a new list of entries ordered for display; collection order is left untouched"""
    key = _SORT_KEYS[parse_sort_method(method)]
    return sorted(entries, key=key, reverse=descending)
