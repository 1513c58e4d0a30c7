"""Transport record with its append-only status history."""

from dataclasses import dataclass, replace
from typing import Union

from .codec import (
    dump_document,
    expect_list,
    expect_object,
    int_field,
    load_document,
    str_field,
)

RECORD_TYPE = "Transport"


@dataclass(frozen=True)
class Status:
    """One entry of a transport's history."""

    name: str
    author: str

    def to_dict(self) -> dict:
        return {"name": self.name, "author": self.author}

    @classmethod
    def from_dict(cls, doc: object) -> "Status":
        if doc is None:
            return cls(name="", author="")
        doc = expect_object(doc, "Status")
        return cls(
            name=str_field(doc, "name", "Status"),
            author=str_field(doc, "author", "Status"),
        )


@dataclass(frozen=True)
class Transport:
    """Shipment stored under the composite key ``(Transport, id)``."""

    id: str
    qty: int = 0
    statuses: tuple[Status, ...] = ()

    def with_status(self, status: Status) -> "Transport":
        """Return a copy with ``status`` appended to the history."""
        return replace(self, statuses=self.statuses + (status,))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "qty": self.qty,
            "statuses": [status.to_dict() for status in self.statuses],
        }

    def to_json(self) -> bytes:
        return dump_document(self.to_dict())

    @classmethod
    def from_dict(cls, doc: object) -> "Transport":
        doc = expect_object(doc, RECORD_TYPE)
        raw_statuses = doc.get("statuses")
        statuses = () if raw_statuses is None else tuple(
            Status.from_dict(item) for item in expect_list(raw_statuses, "Status")
        )
        return cls(
            id=str_field(doc, "id", RECORD_TYPE),
            qty=int_field(doc, "qty", RECORD_TYPE),
            statuses=statuses,
        )

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "Transport":
        return cls.from_dict(load_document(raw, RECORD_TYPE))

    @staticmethod
    def list_to_json(transports: list["Transport"]) -> bytes:
        return dump_document([transport.to_dict() for transport in transports])
