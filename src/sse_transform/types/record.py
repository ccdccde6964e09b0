from collections.abc import Iterator
from collections.abc import Mapping
from enum import Enum
from enum import auto
from types import MappingProxyType
from typing import Any
from typing import Final
from typing import NamedTuple
from typing import Self
from typing import final


@final
class Missing(Enum):
    MISSING = auto()


# Distinguishes an absent field from a field that is present with a JSON `null` value.
MISSING: Final = Missing.MISSING

COMMENT_FIELD: Final = "$comment"

# Emission order of the reserved fields.
RESERVED_FIELDS: Final = ("id", "event", "data", "retry", COMMENT_FIELD)


@final
class Record(NamedTuple):
    id: Any = MISSING
    event: Any = MISSING
    data: Any = MISSING
    retry: Any = MISSING
    comment: Any = MISSING  # Emitted as a comment line (`:value`).
    custom: Mapping[str, Any] = MappingProxyType({})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Self:
        custom: Final[dict[str, Any]] = {}
        reserved: Final[dict[str, Any]] = {}
        for key, value in mapping.items():
            if key == COMMENT_FIELD:
                reserved["comment"] = value
            elif key in RESERVED_FIELDS:
                reserved[key] = value
            else:
                custom[key] = value
        return cls(**reserved, custom=custom)

    def reserved_items(self) -> Iterator[tuple[str, Any]]:
        """Yields `(field name, value)` for every reserved field that is present, in emission order."""
        values: Final = (self.id, self.event, self.data, self.retry, self.comment)
        for name, value in zip(RESERVED_FIELDS, values, strict=True):
            if value is not MISSING:
                yield name, value
