"""
Listing record model consumed by the flyer renderer.

Records are immutable: the renderer only reads them and every formatted
value is derived on access.
"""
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
from typing import Any, Mapping, Optional

from utils.timestamps import utc_now, parse_timestamp


class _LabeledEnum(Enum):
    """Enum whose value is the display label."""

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw):
        """Accept a member, its label ("For Lease") or its name ("lease")."""
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        for member in cls:
            if text == member.value or text.lower() == member.name.lower():
                return member
        for member in cls:
            if text.lower() == member.value.lower():
                return member
        raise ValueError(f"Unknown {cls.__name__}: {raw!r}")


class PropertyType(_LabeledEnum):
    OFFICE = "Office"
    RETAIL = "Retail"
    INDUSTRIAL = "Industrial"
    LAND = "Land"


class SizeUnit(_LabeledEnum):
    SQFT = "sq ft"
    SQM = "sq m"

    def convert(self, value: float, to: "SizeUnit") -> float:
        if self is to:
            return value
        if self is SizeUnit.SQFT:
            return value * 0.092903
        return value * 10.7639


class PriceType(_LabeledEnum):
    SALE = "For Sale"
    LEASE = "For Lease"

    @property
    def price_suffix(self) -> str:
        return "/month" if self is PriceType.LEASE else ""


def _group_whole(value) -> str:
    """Round to a whole number (banker's rounding) and group thousands."""
    whole = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    return f"{int(whole):,}"


def format_price(price, price_type: PriceType) -> str:
    """
    US currency with no fraction digits plus the price type suffix.

    Examples:
        2500000, SALE -> "$2,500,000"
        3000, LEASE -> "$3,000/month"
    """
    return f"${_group_whole(price)}{price_type.price_suffix}"


def format_size(size, unit: SizeUnit) -> str:
    """5000, SQFT -> "5,000 sq ft" (never converts between units)."""
    return f"{_group_whole(size)} {unit.display_name}"


@dataclass(frozen=True)
class ContactInfo:
    name: str = ""
    phone: str = ""
    email: str = ""
    company: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.phone and self.email)


@dataclass(frozen=True)
class ListingRecord:
    title: str
    property_type: PropertyType
    size: float
    size_unit: SizeUnit
    price: float
    price_type: PriceType
    address: str = ""
    description: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)
    image_bytes: Optional[bytes] = field(default=None, repr=False)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        for name in ("size", "price"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")

    @property
    def formatted_price(self) -> str:
        return format_price(self.price, self.price_type)

    @property
    def formatted_size(self) -> str:
        return format_size(self.size, self.size_unit)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], image_bytes: Optional[bytes] = None) -> "ListingRecord":
        """
        Build a record from a plain mapping (record-store export / CLI JSON).

        Keys follow the attribute names; camelCase aliases from the mobile
        export (propertyType, sizeUnit, priceType, createdAt, updatedAt) are
        accepted too.
        """
        def pick(*keys, default=None):
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            return default

        contact_raw = pick("contact", "broker_info", "brokerInfo", default={}) or {}
        if not isinstance(contact_raw, Mapping):
            raise ValueError(f"contact must be an object, got {type(contact_raw).__name__}")
        contact = ContactInfo(
            name=str(contact_raw.get("name") or ""),
            phone=str(contact_raw.get("phone") or ""),
            email=str(contact_raw.get("email") or ""),
            company=str(contact_raw.get("company") or ""),
        )

        kwargs = {
            "title": str(pick("title", default="")),
            "property_type": PropertyType.parse(pick("property_type", "propertyType", default="Office")),
            "size": float(pick("size", default=0)),
            "size_unit": SizeUnit.parse(pick("size_unit", "sizeUnit", default="sq ft")),
            "price": float(pick("price", default=0)),
            "price_type": PriceType.parse(pick("price_type", "priceType", default="For Sale")),
            "address": str(pick("address", default="")),
            "description": str(pick("description", default="")),
            "contact": contact,
            "image_bytes": image_bytes,
        }

        timestamp_keys = (
            ("created_at", ("created_at", "createdAt")),
            ("updated_at", ("updated_at", "updatedAt")),
        )
        for attr, keys in timestamp_keys:
            raw = pick(*keys)
            if isinstance(raw, datetime):
                kwargs[attr] = raw
            elif raw:
                parsed = parse_timestamp(str(raw))
                if parsed is None:
                    raise ValueError(f"Unparseable {attr}: {raw!r}")
                kwargs[attr] = parsed

        record_id = pick("id")
        if record_id:
            kwargs["id"] = record_id if isinstance(record_id, uuid.UUID) else uuid.UUID(str(record_id))

        return cls(**kwargs)
