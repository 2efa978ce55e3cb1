"""Right-to-left layout detector."""

import re
from typing import Iterable, List, Optional

from ..core.issue import Issue, IssueKind
from ..utils.validators import is_rtl_locale
from .events import DirectionObservation

# Physical-direction CSS properties and their logical replacements
PHYSICAL_PROPERTIES = {
    'margin-left': 'margin-inline-start',
    'margin-right': 'margin-inline-end',
    'padding-left': 'padding-inline-start',
    'padding-right': 'padding-inline-end',
    'border-left': 'border-inline-start',
    'border-right': 'border-inline-end',
    'left': 'inset-inline-start',
    'right': 'inset-inline-end',
    'text-align: left': 'text-align: start',
    'text-align: right': 'text-align: end',
    'float: left': 'float: inline-start',
    'float: right': 'float: inline-end',
}

# Utility classes (Tailwind style) with a physical direction: ml-2, pr-4,
# left-0, text-left, rounded-l-md, border-r ...
_PHYSICAL_UTILITY = re.compile(
    r'^-?([a-z]+:)*-?('
    r'[mp][lr]-[\w./\[\]]+'
    r'|(left|right)-[\w./\[\]]+'
    r'|text-(left|right)'
    r'|float-(left|right)'
    r'|rounded-[lr](-[\w]+)?'
    r'|border-[lr](-[\w]+)?'
    r')$'
)


def find_physical_properties(properties: Iterable[str]) -> List[str]:
    """Properties / utility classes that ignore writing direction."""
    found = []
    for prop in properties:
        normalized = re.sub(r'\s+', ' ', prop.strip().lower())
        declaration = re.sub(r'\s*:\s*', ': ', normalized).rstrip(';')
        name = declaration.split(':', 1)[0].strip()
        if (declaration in PHYSICAL_PROPERTIES or name in PHYSICAL_PROPERTIES
                or _PHYSICAL_UTILITY.match(normalized)):
            found.append(prop.strip())
    return found


def detect_rtl_violation(
    event: DirectionObservation,
    rtl_locales: Optional[Iterable[str]] = None,
) -> Optional[Issue]:
    """
    Report direction-unaware styling rendered under an RTL locale.

    Args:
        event: Styling observation for one component
        rtl_locales: Extra locales to treat as right-to-left

    Returns:
        Issue, or None for LTR locales and direction-aware components
    """
    extra = set(rtl_locales or ())
    if not (is_rtl_locale(event.locale) or event.locale in extra):
        return None

    offending = find_physical_properties(event.properties)
    forced_ltr = (event.direction or '').strip().lower() == 'ltr'

    if not offending and not forced_ltr:
        return None

    if forced_ltr:
        offending = ['dir=ltr'] + offending

    location = event.location
    return Issue(
        kind=IssueKind.RTL_VIOLATION,
        locale=event.locale,
        namespace=location.component_name,
        key=offending[0],
        location=location,
        message=(
            f"{location.component_name} uses direction-unaware styling under "
            f"'{event.locale}': {', '.join(offending)}"
        ),
        first_seen_at=event.observed_at,
        last_seen_at=event.observed_at,
    )
