"""Domain models (Pydantic) for the KML request/render cycle."""
from enum import IntEnum

from pydantic import BaseModel, Field

from kml_client.errors import ElementNotFoundError


class Action(IntEnum):
    """Request selector; only KML produces a request."""

    KML = 1


# -------------------- Form Input -------------------- #


class KmlForm(BaseModel):
    """Form field values passed straight through into the query string.

    Values are kept as text; numbers are accepted and rendered with ``str()``
    so ``west=110`` and ``west="110"`` build the same query.
    """

    layer: str = ""
    region: str = ""
    west: str = ""
    south: str = ""
    east: str = ""
    north: str = ""
    time: str = ""

    model_config = {"coerce_numbers_to_str": True}


# -------------------- Page State -------------------- #


class Element(BaseModel):
    """A page element receiving response text."""

    id: str
    content: str = ""
    display: str = "none"


class Page(BaseModel):
    """Elements addressable by id (a minimal document stand-in)."""

    elements: dict[str, Element] = Field(default_factory=dict)

    @classmethod
    def with_elements(cls, *ids: str) -> "Page":
        return cls(elements={i: Element(id=i) for i in ids})

    def get_element(self, element_id: str) -> Element:
        try:
            return self.elements[element_id]
        except KeyError:
            raise ElementNotFoundError(element_id) from None


# -------------------- Request Outcome -------------------- #


class FetchResult(BaseModel):
    """Outcome of the single GET (status is informational only)."""

    url: str
    status_code: int
    text: str
    latency_ms: float


__all__ = [
    "Action",
    "Element",
    "FetchResult",
    "KmlForm",
    "Page",
]
