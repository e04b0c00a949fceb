"""Pydantic v2 models for the SRS content expander.

Defines the user-supplied seed (``RawInput``) and the immutable, fully
templated document (``ExpandedDocument``) derived from it.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_MEMBERS = 3


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class RawInput(BaseModel):
    """The minimal seed typed in by the user.

    Blank member entries are allowed (they are rows still being edited) but
    the list itself can never hold more than ``MAX_MEMBERS`` entries.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(default="", description="Project name as typed")
    description: str = Field(default="", description="One-paragraph description")
    members: tuple[str, ...] = Field(
        default=(), max_length=MAX_MEMBERS, description="Contributor names, blanks allowed"
    )

    def filled_members(self) -> list[str]:
        """Return the non-blank member names, stripped, in input order."""
        return [m.strip() for m in self.members if m and m.strip()]


# ---------------------------------------------------------------------------
# Expanded document sections
# ---------------------------------------------------------------------------

class _Section(BaseModel):
    model_config = ConfigDict(frozen=True)


class Definition(_Section):
    """A term/meaning pair listed under Introduction > Definitions."""
    term: str
    meaning: str


class CoverSection(_Section):
    """Title page content."""
    title: str
    project_name: str
    description: str
    members: tuple[str, ...] = Field(..., min_length=1)
    date: datetime.date

    @property
    def date_label(self) -> str:
        """The generation date as a short US-style label, e.g. ``10/7/2026``."""
        return f"{self.date.month}/{self.date.day}/{self.date.year}"


class IntroductionSection(_Section):
    """Section 1: purpose, scope, definitions and references."""
    purpose: str
    scope: str
    definitions: tuple[Definition, ...]
    references: str


class GeneralDescriptionSection(_Section):
    """Section 2: overall description of the product."""
    product_perspective: str
    product_functions: str
    user_characteristics: str
    general_constraints: str
    assumptions_dependencies: str


class SpecificRequirementsSection(_Section):
    """Section 3: functional, interface and non-functional requirements."""
    functional_requirements: tuple[str, ...]
    external_interface_requirements: str
    non_functional_requirements: tuple[str, ...]


class ExpandedDocument(_Section):
    """The canonical SRS document produced by one expansion call.

    Immutable: regenerating requires calling the expander again.  ``source``
    keeps the seed the document was expanded from.
    """
    cover: CoverSection
    introduction: IntroductionSection
    general_description: GeneralDescriptionSection
    specific_requirements: SpecificRequirementsSection
    source: RawInput = Field(default_factory=RawInput)
