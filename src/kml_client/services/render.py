"""Page updates: response injection and visibility toggling."""
from __future__ import annotations

import logging

from kml_client.domain.models import Page

logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_ID = "kml"


def show_hide(page: Page, element_id: str, state: str | None = None) -> None:
    """Set the element's display state (``"block"`` when omitted)."""
    if state is None:
        state = "block"
    page.get_element(element_id).display = str(state)


def render_response(page: Page, text: str, element_id: str = DEFAULT_ELEMENT_ID) -> None:
    element = page.get_element(element_id)
    element.content = text
    show_hide(page, element_id, "block")
    logger.debug("rendered %d chars into #%s", len(text), element_id)


__all__ = ["DEFAULT_ELEMENT_ID", "render_response", "show_hide"]
