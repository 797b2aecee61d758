"""Location tag extraction from free-text descriptions."""

import re

UNSPECIFIED_LOCATION = "Unspecified"

_TAG_PATTERN = re.compile(r"@<([^>]*)>")


def extract_location(text: str) -> str:
    """Return the first ``@<Name>`` tag in the text, or the sentinel label.

    Only the first tag is honored. An empty or blank first tag yields the
    sentinel even if a later tag is present.
    """
    match = _TAG_PATTERN.search(text)
    if match is None:
        return UNSPECIFIED_LOCATION
    label = match.group(1).strip()
    return label or UNSPECIFIED_LOCATION
