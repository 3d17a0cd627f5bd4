"""
Canonical target values.

Maps configuration tokens to the PDF names the norms compare against,
and rewrites destination arrays to a new zoom mode.

Destination arrays are lists shaped ``[page, zoom, *params]``. Each zoom
mode has its own parameter arity:

    Fit, FitB       no parameters
    FitH, FitBH     top
    XYZ             left top zoom
"""

from __future__ import annotations

FIT = "Fit"
FIT_H = "FitH"
FIT_B = "FitB"
FIT_BH = "FitBH"
XYZ = "XYZ"

DEFAULT_PAGE_MODE = "UseOutlines"
DEFAULT_PAGE_LAYOUT = "TwoPageRight"
DEFAULT_BOOKMARK_ZOOM = FIT
DEFAULT_OPEN_TO_PAGE = 1

PAGE_MODES = {
    "PageOnly": "UseNone",
    "Bookmarks": "UseOutlines",
    "Pages": "UseThumbs",
    "Attachments": "UseAttachments",
    "Layers": "UseOC",
}

PAGE_LAYOUTS = {
    name: name
    for name in (
        "SinglePage",
        "OneColumn",
        "TwoColumnLeft",
        "TwoColumnRight",
        "TwoPageLeft",
        "TwoPageRight",
    )
}

BOOKMARK_ZOOMS = {
    "FitPage": FIT,
    "FitWidth": FIT_H,
    "FitVisible": FIT_B,
    "ActualSize": XYZ,
    "InheritZoom": XYZ,
}

ZOOM_DESCRIPTIONS = {
    FIT: "Fit Page",
    FIT_H: "Fit Width",
    FIT_B: "Fit Visible",
    XYZ: "XYZ",
}


def target_page_mode(token: str | None) -> str:
    """Config token -> /PageMode name. Unset or unknown tokens give UseOutlines."""
    return PAGE_MODES.get(token or "", DEFAULT_PAGE_MODE)


def target_page_layout(token: str | None) -> str:
    """Config token -> /PageLayout name. Unset or unknown tokens give TwoPageRight."""
    return PAGE_LAYOUTS.get(token or "", DEFAULT_PAGE_LAYOUT)


def target_bookmark_zoom(token: str | None) -> str:
    """Config token -> destination zoom name. Unset or unknown tokens give Fit."""
    return BOOKMARK_ZOOMS.get(token or "", DEFAULT_BOOKMARK_ZOOM)


def target_open_page(requested: int | None, page_count: int) -> int:
    """Page the open action should show; out-of-range requests fall back to page 1."""
    page = requested if requested is not None else DEFAULT_OPEN_TO_PAGE
    if page < 1 or page > page_count:
        return DEFAULT_OPEN_TO_PAGE
    return page


def describe_zoom(zoom: str) -> str:
    return ZOOM_DESCRIPTIONS.get(zoom, ZOOM_DESCRIPTIONS[FIT])


def canonicalize_destination(dest: list, target_zoom: str) -> None:
    """Rewrite a destination array in place to use ``target_zoom``.

    Only the transitions the norms produce are normalized:

    - to XYZ: short arrays get ``0 0 0`` (left, top, zoom) appended;
      longer arrays keep their parameters.
    - from FitH/FitBH: the single top parameter is dropped unless the
      target is FitH.
    - from XYZ: all parameters are dropped.
    - anything else: only the zoom name changes.
    """
    current = dest[1] if len(dest) > 1 else None

    if target_zoom == XYZ:
        _set_zoom(dest, XYZ)
        if len(dest) <= 2:
            dest.extend([0, 0, 0])
    elif current in (FIT_H, FIT_BH):
        _set_zoom(dest, target_zoom)
        if target_zoom != FIT_H and len(dest) > 2:
            del dest[2]
    elif current == XYZ:
        _set_zoom(dest, target_zoom)
        del dest[2:]
    else:
        _set_zoom(dest, target_zoom)


def _set_zoom(dest: list, zoom: str) -> None:
    if len(dest) > 1:
        dest[1] = zoom
    else:
        dest.append(zoom)
