import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from pydantic import TypeAdapter, ValidationError

from .core import CorruptCartError
from .logging import get_logger
from .models import Product

# This file holds the durable key-value stores and the cart snapshot codec.

logger = get_logger(__name__)

CART_STORAGE_KEY = "@rocketcart:cart"

_CART_ADAPTER = TypeAdapter(List[Product])


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Process-local storage. Counts writes so callers can tell a no-op from a commit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class JsonFileStorage:
    """
    All keys live in one JSON object on disk, the way a browser keeps
    localStorage for an origin. Writes go through a temp file and os.replace
    so a crash never leaves half a snapshot behind.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except ValueError as e:
            logger.warning(f"Discarding unreadable storage file {self.path}: {e}")
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


# ---------------------------
# Cart snapshot codec
# ---------------------------
def serialize_cart(cart) -> str:
    return _CART_ADAPTER.dump_json(list(cart), by_alias=True).decode("utf-8")


def deserialize_cart(raw: str) -> Tuple[Product, ...]:
    try:
        products = _CART_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise CorruptCartError(f"invalid cart snapshot: {e.error_count()} error(s)") from e

    seen = set()
    for p in products:
        if p.id in seen:
            raise CorruptCartError(f"invalid cart snapshot: duplicate product id {p.id}")
        seen.add(p.id)
    return tuple(products)
