"""Flattened text payload sent to the remote rendering service.

Each of the four SRS sections collapses into one ``Label: value`` block with
newline-separated lines.  This is the only request schema the remote path
uses; the local path never serialises the document at all.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from srs_gen.expander.models import ExpandedDocument


class RenderPayload(BaseModel):
    """JSON body of ``POST /api/generate-srs``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cover: str
    introduction: str
    general_description: str = Field(..., alias="generalDescription")
    specific_requirements: str = Field(..., alias="specificRequirements")

    def to_json_body(self) -> dict[str, str]:
        """The request body with its wire key names."""
        return self.model_dump(by_alias=True)


def _block(*lines: tuple[str, str]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in lines)


def flatten_document(document: ExpandedDocument) -> RenderPayload:
    """Serialise *document* into the four labelled text blocks."""
    cover = document.cover
    intro = document.introduction
    general = document.general_description
    specific = document.specific_requirements

    return RenderPayload(
        cover=_block(
            ("Title", cover.title),
            ("Project", cover.project_name),
            ("Description", cover.description),
            ("Members", ", ".join(cover.members)),
            ("Date", cover.date_label),
        ),
        introduction=_block(
            ("Purpose", intro.purpose),
            ("Scope", intro.scope),
            ("Definitions", "; ".join(f"{d.term} = {d.meaning}" for d in intro.definitions)),
            ("References", intro.references),
        ),
        general_description=_block(
            ("Product Perspective", general.product_perspective),
            ("Product Functions", general.product_functions),
            ("User Characteristics", general.user_characteristics),
            ("Constraints", general.general_constraints),
            ("Assumptions/Dependencies", general.assumptions_dependencies),
        ),
        specific_requirements=_block(
            ("Functional Requirements", " | ".join(specific.functional_requirements)),
            ("External Interfaces", specific.external_interface_requirements),
            ("Non-Functional Requirements", " | ".join(specific.non_functional_requirements)),
        ),
    )
