from collections.abc import Callable
from collections.abc import Mapping
from typing import Any
from typing import Final
from typing import NamedTuple
from typing import final


@final
class Rename(NamedTuple):
    name: str


@final
class Transform(NamedTuple):
    # Should return a string; other return values are JSON-encoded.
    function: Callable[[Any], Any]


type FieldMapping = Rename | Transform
type FieldMap = Mapping[str, FieldMapping]
# Renames may also be given as plain strings and transforms as plain callables.
type LooseFieldMap = Mapping[str, str | Callable[[Any], Any] | FieldMapping]


def field_map_from(raw: LooseFieldMap) -> dict[str, FieldMapping]:
    """
    Converts the loose `{field: new_name | function}` notation into a field map.
    Already tagged entries are kept as they are.
    """
    field_map: Final[dict[str, FieldMapping]] = {}
    for field, mapping in raw.items():
        match mapping:
            case Rename() | Transform():
                field_map[field] = mapping
            case str():
                field_map[field] = Rename(mapping)
            case _ if callable(mapping):
                field_map[field] = Transform(mapping)
            case _:
                raise TypeError(f"Invalid mapping for field '{field}': expected a string or a callable.")
    return field_map
