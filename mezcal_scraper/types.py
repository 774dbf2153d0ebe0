from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .extract import price_value


@dataclass(frozen=True)
class RawListing:
    title: str
    price: str
    link: Optional[str] = None
    image: Optional[str] = None
    pack: Optional[str] = None
    size: Optional[str] = None
    alcohol: Optional[str] = None


@dataclass(frozen=True)
class StructuredRecord:
    brand: str
    maguey: str
    description: str
    size: str
    price: str
    source: str
    alcohol: str = ""
    pack: str = "Bottle"
    link: str = ""
    image: str = ""

    @property
    def price_value(self) -> float:
        return price_value(self.price)

    def to_dict(self) -> dict:
        """JSON wire form.

        Besides the record fields this carries the derived "priceValue" and the
        grid's "link" and "image" keys, which are empty strings for table rows.
        """
        return {
            "brand": self.brand,
            "maguey": self.maguey,
            "description": self.description,
            "size": self.size,
            "price": self.price,
            "priceValue": self.price_value,
            "alcohol": self.alcohol,
            "source": self.source,
            "pack": self.pack,
            "link": self.link,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StructuredRecord":
        # priceValue is derived from price and not read back
        return cls(
            brand=str(data.get("brand") or ""),
            maguey=str(data.get("maguey") or ""),
            description=str(data.get("description") or ""),
            size=str(data.get("size") or ""),
            price=str(data.get("price") or ""),
            source=str(data.get("source") or ""),
            alcohol=str(data.get("alcohol") or ""),
            pack=str(data.get("pack") or "Bottle"),
            link=str(data.get("link") or ""),
            image=str(data.get("image") or ""),
        )


def dump_records(records: Iterable[StructuredRecord], indent: Optional[int] = 2) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=indent)


def load_records(text: str) -> List[StructuredRecord]:
    data = json.loads(text or "[]")
    if not isinstance(data, list):
        raise ValueError("inventory JSON must be an array of records")
    return [StructuredRecord.from_dict(obj) for obj in data if isinstance(obj, dict)]
