"""Content expander: ``RawInput`` -> ``ExpandedDocument``.

A deterministic pure function.  The only ambient read is the clock, used once
per call to stamp ``cover.date``; every other field depends on the input
alone, so two calls with the same seed differ only in that date.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from srs_gen.expander import templates
from srs_gen.expander.models import (
    CoverSection,
    Definition,
    ExpandedDocument,
    GeneralDescriptionSection,
    IntroductionSection,
    RawInput,
    SpecificRequirementsSection,
)


def expand(raw: RawInput, *, today: date | None = None) -> ExpandedDocument:
    """Expand the user's seed into the full SRS document.

    Never fails: empty fields fall back to fixed placeholder text.

    Args:
        raw: The validated seed (at most ``MAX_MEMBERS`` members).
        today: Date stamped on the cover. Read from the clock when omitted.

    Returns:
        A frozen ``ExpandedDocument``.
    """
    name = raw.project_name.strip() or templates.FALLBACK_PROJECT_NAME
    desc = raw.description.strip() or templates.FALLBACK_DESCRIPTION
    group = raw.filled_members() or [templates.FALLBACK_MEMBER]
    stamp = today if today is not None else date.today()

    cover = CoverSection(
        title=templates.DOCUMENT_TITLE,
        project_name=name,
        description=desc,
        members=tuple(group),
        date=stamp,
    )

    introduction = IntroductionSection(
        purpose=templates.PURPOSE.format(name=name),
        scope=templates.SCOPE.format(name=name, description=desc),
        definitions=tuple(
            Definition(term=term, meaning=meaning) for term, meaning in templates.DEFINITIONS
        ),
        references=templates.REFERENCES,
    )

    general = GeneralDescriptionSection(
        product_perspective=templates.PRODUCT_PERSPECTIVE.format(name=name),
        product_functions=templates.PRODUCT_FUNCTIONS,
        user_characteristics=templates.USER_CHARACTERISTICS,
        general_constraints=templates.GENERAL_CONSTRAINTS,
        assumptions_dependencies=templates.ASSUMPTIONS_DEPENDENCIES,
    )

    specific = SpecificRequirementsSection(
        functional_requirements=templates.FUNCTIONAL_REQUIREMENTS,
        external_interface_requirements=templates.EXTERNAL_INTERFACE_REQUIREMENTS,
        non_functional_requirements=templates.NON_FUNCTIONAL_REQUIREMENTS,
    )

    return ExpandedDocument(
        cover=cover,
        introduction=introduction,
        general_description=general,
        specific_requirements=specific,
        source=raw,
    )


class ContentExpander:
    """Callable wrapper around :func:`expand` with an injectable clock."""

    def __init__(self, clock: Callable[[], date] = date.today) -> None:
        self.clock = clock

    def expand(self, raw: RawInput) -> ExpandedDocument:
        return expand(raw, today=self.clock())

    __call__ = expand
