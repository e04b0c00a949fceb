"""SRS generator -- Expander module.

Turns the user's project name, description and up to three member names
into the fixed four-section SRS document.

Public API
----------
.. autofunction:: expand
.. autoclass:: ContentExpander
.. autoclass:: RawInput
.. autoclass:: ExpandedDocument
"""

from .expander import ContentExpander, expand
from .models import (
    MAX_MEMBERS,
    CoverSection,
    Definition,
    ExpandedDocument,
    GeneralDescriptionSection,
    IntroductionSection,
    RawInput,
    SpecificRequirementsSection,
)

__all__ = [
    "expand",
    "ContentExpander",
    "MAX_MEMBERS",
    "RawInput",
    "ExpandedDocument",
    "CoverSection",
    "Definition",
    "IntroductionSection",
    "GeneralDescriptionSection",
    "SpecificRequirementsSection",
]
