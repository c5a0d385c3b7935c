"""
Page Relay — Page Property Helpers
====================================

What:  Builds and reads the fixed property schema the UI works with:
       a `Name` title property and a `Status` status property.
Who:   Used by PageService for create/edit and for list summaries.

Arbitrary property bags sent as `properties` bypass these helpers and are
relayed untouched.
"""

from typing import Any, Dict, Mapping, Optional

from pagerelay.schemas.page import PageSummary

DEFAULT_STATUS = "In Progress"
UNTITLED = "Untitled"
NO_STATUS = "No Status"


def build_properties(title: str, status: Optional[str] = None) -> Dict[str, Any]:
    """Name/Status property bag for create and update calls."""
    return {
        "Name": {"title": [{"text": {"content": title}}]},
        "Status": {"status": {"name": status or DEFAULT_STATUS}},
    }


def _first_plain_text(prop: Any) -> str:
    if not isinstance(prop, Mapping):
        return ""
    title = prop.get("title")
    if not isinstance(title, list) or not title or not isinstance(title[0], Mapping):
        return ""
    text = title[0].get("plain_text")
    return text if isinstance(text, str) else ""


def _properties(page: Any) -> Mapping[str, Any]:
    properties = page.get("properties") if isinstance(page, Mapping) else None
    return properties if isinstance(properties, Mapping) else {}


def page_title(page: Mapping[str, Any]) -> str:
    """Title from `Name`, then the default `title` property, then 'Untitled'."""
    properties = _properties(page)
    return (
        _first_plain_text(properties.get("Name"))
        or _first_plain_text(properties.get("title"))
        or UNTITLED
    )


def page_status(page: Mapping[str, Any]) -> str:
    prop = _properties(page).get("Status")
    status = prop.get("status") if isinstance(prop, Mapping) else None
    name = status.get("name") if isinstance(status, Mapping) else None
    return name if isinstance(name, str) and name else NO_STATUS


def summarize_page(page: Mapping[str, Any]) -> PageSummary:
    return PageSummary(
        id=str(page.get("id", "")),
        title=page_title(page),
        status=page_status(page),
        created_time=page.get("created_time"),
        last_edited_time=page.get("last_edited_time"),
        archived=bool(page.get("archived", False)),
    )
