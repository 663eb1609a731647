from typing import Any, Protocol
import json


class Serializer(Protocol):
    """Serialize/deserialize Python values for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `extension` is the file suffix used for stored values.
    """

    extension: str

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Compact JSON, the same text `JSON.stringify` would produce.

    Caller must ensure values are JSON-serializable; anything else raises
    `TypeError` from the json module.
    """

    extension = '.json'

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False).encode('utf-8')

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode('utf-8'))
