"""Unit tests for the content expander (srs_gen.expander.expander).

Tests cover:
- Fallback text for empty project name, description and members
- Member filtering (blanks dropped, order kept, exactly three accepted)
- Determinism (identical seeds differ only in cover.date)
- Templated sentences interpolating name and description
- Fixed requirement lists (FR-1..FR-5, NFR-1..NFR-4)
- ContentExpander clock injection
"""

from __future__ import annotations

from datetime import date

import pytest

from srs_gen.expander import ContentExpander, RawInput, expand
from srs_gen.expander import templates


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

class TestFallbacks:
    @pytest.mark.unit
    def test_empty_project_name_uses_placeholder(self, empty_input, fixed_date):
        doc = expand(empty_input, today=fixed_date)
        assert doc.cover.project_name == "Untitled Project"

    @pytest.mark.unit
    def test_empty_description_uses_placeholder(self, empty_input, fixed_date):
        doc = expand(empty_input, today=fixed_date)
        assert doc.cover.description == "No description provided."

    @pytest.mark.unit
    def test_blank_members_use_placeholder(self, empty_input, fixed_date):
        doc = expand(empty_input, today=fixed_date)
        assert doc.cover.members == ("(No members)",)

    @pytest.mark.unit
    def test_no_members_at_all(self, fixed_date):
        doc = expand(RawInput(project_name="X"), today=fixed_date)
        assert list(doc.cover.members) == ["(No members)"]

    @pytest.mark.unit
    def test_placeholder_name_flows_into_templates(self, empty_input, fixed_date):
        doc = expand(empty_input, today=fixed_date)
        assert '"Untitled Project" project' in doc.introduction.purpose
        assert doc.introduction.scope.startswith("The Untitled Project aims to No description provided.")

    @pytest.mark.unit
    def test_surrounding_whitespace_is_trimmed(self, fixed_date):
        doc = expand(RawInput(project_name="  Acme  ", description=" tracks widgets. "), today=fixed_date)
        assert doc.cover.project_name == "Acme"
        assert doc.cover.description == "tracks widgets."


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

class TestMembers:
    @pytest.mark.unit
    def test_example_members_in_order(self, expanded_document):
        assert list(expanded_document.cover.members) == ["Vraj Adhia", "John Doe", "Jane Smith"]

    @pytest.mark.unit
    def test_blank_entries_filtered(self, fixed_date):
        doc = expand(RawInput(members=["Ann", "", "Bo"]), today=fixed_date)
        assert doc.cover.members == ("Ann", "Bo")

    @pytest.mark.unit
    def test_filtered_members_never_exceed_cap(self, fixed_date):
        doc = expand(RawInput(members=["A", "B", "C"]), today=fixed_date)
        assert len(doc.cover.members) == 3


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    @pytest.mark.unit
    def test_same_seed_same_document(self, example_input, fixed_date):
        first = expand(example_input, today=fixed_date)
        second = expand(example_input, today=fixed_date)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    @pytest.mark.unit
    def test_only_date_differs_across_days(self, example_input):
        first = expand(example_input, today=date(2026, 1, 1))
        second = expand(example_input, today=date(2026, 1, 2))
        assert first.cover.date != second.cover.date

        a = first.model_dump(exclude={"cover": {"date"}})
        b = second.model_dump(exclude={"cover": {"date"}})
        assert a == b

    @pytest.mark.unit
    def test_date_defaults_to_today(self, example_input):
        doc = expand(example_input)
        assert doc.cover.date == date.today()


# ---------------------------------------------------------------------------
# Template content
# ---------------------------------------------------------------------------

class TestTemplates:
    @pytest.mark.unit
    def test_cover_title_constant(self, expanded_document):
        assert expanded_document.cover.title == "Software Requirements Specification (SRS)"

    @pytest.mark.unit
    def test_purpose_interpolates_name(self, expanded_document):
        assert '"Smart Attendance Management System" project' in expanded_document.introduction.purpose

    @pytest.mark.unit
    def test_scope_interpolates_name_and_description(self, expanded_document, example_input):
        scope = expanded_document.introduction.scope
        assert scope.startswith("The Smart Attendance Management System aims to A responsive")
        assert example_input.description in scope

    @pytest.mark.unit
    def test_definitions_fixed_order(self, expanded_document):
        terms = [d.term for d in expanded_document.introduction.definitions]
        assert terms == ["SRS", "DBMS", "KYC"]

    @pytest.mark.unit
    def test_product_perspective_interpolates_name(self, expanded_document):
        perspective = expanded_document.general_description.product_perspective
        assert perspective.startswith("Smart Attendance Management System is a standalone")

    @pytest.mark.unit
    def test_static_general_fields_independent_of_input(self, expanded_document, empty_input, fixed_date):
        other = expand(empty_input, today=fixed_date).general_description
        mine = expanded_document.general_description
        assert mine.product_functions == other.product_functions
        assert mine.user_characteristics == other.user_characteristics
        assert mine.general_constraints == other.general_constraints
        assert mine.assumptions_dependencies == other.assumptions_dependencies

    @pytest.mark.unit
    def test_five_functional_requirements(self, expanded_document):
        frs = expanded_document.specific_requirements.functional_requirements
        assert len(frs) == 5
        for index, requirement in enumerate(frs, start=1):
            assert requirement.startswith(f"FR-{index}:")

    @pytest.mark.unit
    def test_four_non_functional_requirements(self, expanded_document):
        nfrs = expanded_document.specific_requirements.non_functional_requirements
        assert len(nfrs) == 4
        assert [n.split(":")[0] for n in nfrs] == ["NFR-1", "NFR-2", "NFR-3", "NFR-4"]

    @pytest.mark.unit
    def test_external_interfaces_constant(self, expanded_document):
        assert (
            expanded_document.specific_requirements.external_interface_requirements
            == templates.EXTERNAL_INTERFACE_REQUIREMENTS
        )

    @pytest.mark.unit
    def test_source_seed_kept(self, expanded_document, example_input):
        assert expanded_document.source == example_input


# ---------------------------------------------------------------------------
# ContentExpander
# ---------------------------------------------------------------------------

class TestContentExpander:
    @pytest.mark.unit
    def test_clock_called_once_per_expansion(self, example_input):
        calls: list[int] = []

        def clock() -> date:
            calls.append(1)
            return date(2025, 12, 31)

        expander = ContentExpander(clock=clock)
        doc = expander.expand(example_input)
        assert doc.cover.date == date(2025, 12, 31)
        assert len(calls) == 1

    @pytest.mark.unit
    def test_callable(self, example_input):
        expander = ContentExpander(clock=lambda: date(2026, 2, 2))
        assert expander(example_input).cover.date == date(2026, 2, 2)
