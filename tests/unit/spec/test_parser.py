"""Unit tests for delta and main spec parsing."""

from pathlib import Path

import pytest

from specflow.exceptions import SpecParseError
from specflow.spec import (
    AddRequirement,
    DeltaKind,
    MainDocument,
    ModifyRequirement,
    RemoveRequirement,
    RenameRequirement,
    RequirementBlock,
    parse_delta_spec,
    parse_main_spec,
    render_main_spec,
    split_requirement_blocks,
)

from tests.conftest import MAIN_SPEC


class TestSplitRequirementBlocks:
    def test_splits_at_headers(self) -> None:
        text = "intro\n### Requirement: A\nbody a\n### Requirement: B\nbody b\n"

        leading, blocks = split_requirement_blocks(text)

        assert leading == "intro\n"
        assert [(b.name, b.body) for b in blocks] == [("A", "body a\n"), ("B", "body b\n")]
        assert blocks[0].header == "### Requirement: A\n"

    def test_name_is_trimmed(self) -> None:
        _, blocks = split_requirement_blocks("###   Requirement:   Spaced Name  \n")

        assert blocks[0].name == "Spaced Name"

    def test_scenario_headers_stay_in_body(self) -> None:
        _, blocks = split_requirement_blocks("### Requirement: A\nx\n#### Scenario: s\ny\n")

        assert blocks[0].body == "x\n#### Scenario: s\ny\n"

    def test_empty_name_raises_with_line(self) -> None:
        with pytest.raises(SpecParseError) as exc_info:
            split_requirement_blocks("text\n### Requirement:   \n")

        assert exc_info.value.line == 2


class TestParseDeltaSpec:
    def test_all_four_sections(self) -> None:
        text = """\
## ADDED Requirements
### Requirement: New
The system SHALL be new.

## MODIFIED Requirements
### Requirement: Login
The system SHALL log in faster.

## REMOVED Requirements
### Requirement: Logout

## RENAMED Requirements
- FROM: `### Requirement: Old`
- TO: `### Requirement: Fresh`
"""
        operations = parse_delta_spec(text)

        assert operations == [
            AddRequirement(name="New", body="The system SHALL be new.\n\n"),
            ModifyRequirement(name="Login", body="The system SHALL log in faster.\n\n"),
            RemoveRequirement(name="Logout"),
            RenameRequirement(from_name="Old", to_name="Fresh"),
        ]
        assert [op.kind for op in operations] == [
            DeltaKind.ADDED,
            DeltaKind.MODIFIED,
            DeltaKind.REMOVED,
            DeltaKind.RENAMED,
        ]

    def test_sections_in_any_order_and_subset(self) -> None:
        text = (
            "## REMOVED Requirements\n- `### Requirement: A`\n\n"
            "## ADDED Requirements\n### Requirement: B\nbody\n"
        )

        operations = parse_delta_spec(text)

        assert operations == [RemoveRequirement(name="A"), AddRequirement(name="B", body="body\n")]

    def test_no_sections_yields_nothing(self) -> None:
        assert parse_delta_spec("# Just a title\n\nSome prose.\n") == []

    def test_other_level_two_header_ends_section(self) -> None:
        text = (
            "## ADDED Requirements\n### Requirement: A\nbody\n"
            "## Notes\n### Requirement: Ignored\nx\n"
        )

        assert parse_delta_spec(text) == [AddRequirement(name="A", body="body\n")]

    def test_headers_inside_code_fences_are_body_text(self) -> None:
        body = (
            "The system SHALL emit this template:\n"
            "```markdown\n"
            "## Summary\n"
            "### Requirement: Example\n"
            "```\n"
            "#### Scenario: Emitted\n"
        )
        text = f"## ADDED Requirements\n### Requirement: Template\n{body}"

        assert parse_delta_spec(text) == [AddRequirement(name="Template", body=body)]

    def test_tilde_fence_needs_matching_close(self) -> None:
        body = "~~~~\n## Notes\n~~~\n## still code\n~~~~\nafter\n"
        text = f"## MODIFIED Requirements\n### Requirement: A\n{body}"

        assert parse_delta_spec(text) == [ModifyRequirement(name="A", body=body)]

    def test_removed_accepts_plain_bullet_and_header_forms(self) -> None:
        text = """\
## REMOVED Requirements
### Requirement: One
- ### Requirement: Two
* `### Requirement: Three`
**Reason**: no longer needed
"""
        assert parse_delta_spec(text) == [
            RemoveRequirement(name="One"),
            RemoveRequirement(name="Two"),
            RemoveRequirement(name="Three"),
        ]

    def test_renamed_accepts_plain_names(self) -> None:
        text = "## RENAMED Requirements\nFROM: Old Name\nTO: New Name\n"

        expected = [RenameRequirement(from_name="Old Name", to_name="New Name")]
        assert parse_delta_spec(text) == expected

    def test_renamed_with_trailing_body_becomes_modification(self) -> None:
        text = """\
## RENAMED Requirements
- FROM: `### Requirement: Old`
- TO: `### Requirement: New`
### Requirement: New
The system SHALL do the new thing.
"""
        assert parse_delta_spec(text) == [
            RenameRequirement(from_name="Old", to_name="New"),
            ModifyRequirement(name="New", body="The system SHALL do the new thing.\n"),
        ]

    def test_to_without_from_raises(self) -> None:
        with pytest.raises(SpecParseError, match="no preceding FROM"):
            parse_delta_spec("## RENAMED Requirements\n- TO: `### Requirement: B`\n")

    def test_from_without_to_raises(self) -> None:
        with pytest.raises(SpecParseError, match="no matching TO") as exc_info:
            parse_delta_spec("## RENAMED Requirements\n- FROM: `### Requirement: A`\n")

        assert exc_info.value.line == 2

    def test_unexpected_header_in_renamed_raises(self) -> None:
        text = "## RENAMED Requirements\n- FROM: A\n- TO: B\n### Requirement: C\nbody\n"

        with pytest.raises(SpecParseError, match="Unexpected requirement header 'C'"):
            parse_delta_spec(text)

    def test_duplicate_added_raises(self) -> None:
        text = "## ADDED Requirements\n### Requirement: A\nx\n### Requirement: A\ny\n"

        with pytest.raises(SpecParseError, match="Duplicate requirement 'A'") as exc_info:
            parse_delta_spec(text)

        assert exc_info.value.line == 4

    def test_error_location_includes_path(self) -> None:
        with pytest.raises(SpecParseError) as exc_info:
            parse_delta_spec("## ADDED Requirements\n### Requirement:\n", path=Path("d/spec.md"))

        assert str(exc_info.value).startswith("d/spec.md:2: ")
        assert exc_info.value.content_type == "delta"

    def test_prose_before_first_header_is_ignored(self) -> None:
        text = "## ADDED Requirements\nSome intro prose.\n### Requirement: A\nbody\n"

        assert parse_delta_spec(text) == [AddRequirement(name="A", body="body\n")]


class TestParseMainSpec:
    def test_preamble_and_blocks(self) -> None:
        document = parse_main_spec(MAIN_SPEC)

        assert document.preamble.startswith("# auth Specification\n")
        assert document.preamble.endswith("## Requirements\n")
        assert list(document.requirements) == ["Login", "Logout"]
        assert document.postamble == ""

    def test_postamble_after_requirements(self) -> None:
        text = MAIN_SPEC + "\n## Notes\nTrailing notes.\n"

        document = parse_main_spec(text)

        assert document.postamble == "## Notes\nTrailing notes.\n"
        assert document.requirements["Logout"].body.endswith("session is destroyed\n\n")

    def test_code_fence_in_body_does_not_start_postamble(self) -> None:
        text = MAIN_SPEC + "\n```\n## Example heading\n```\n"

        document = parse_main_spec(text)

        assert document.postamble == ""
        assert document.requirements["Logout"].body.endswith("```\n## Example heading\n```\n")
        assert render_main_spec(document) == text

    def test_no_requirements_is_all_preamble(self) -> None:
        text = "# Spec\n\n## Purpose\nx\n\n## Other\ny\n"

        document = parse_main_spec(text)

        assert document.preamble == text
        assert document.requirements == {}

    def test_duplicate_requirement_raises(self) -> None:
        text = "### Requirement: A\nx\n### Requirement: A\ny\n"

        with pytest.raises(SpecParseError, match="Duplicate requirement 'A'") as exc_info:
            parse_main_spec(text)

        assert exc_info.value.content_type == "main"


class TestRenderMainSpec:
    @pytest.mark.parametrize(
        "text",
        [
            MAIN_SPEC,
            MAIN_SPEC + "\n## Notes\nx\n",
            MAIN_SPEC.rstrip("\n"),
            MAIN_SPEC.replace("\n", "\r\n"),
            "# Only a title\n",
            "",
        ],
    )
    def test_parse_then_render_is_identity(self, text: str) -> None:
        assert render_main_spec(parse_main_spec(text)) == text

    def test_new_block_is_separated_by_blank_line(self) -> None:
        document = parse_main_spec("## Requirements\n### Requirement: A\nbody a\n")
        document.requirements["B"] = RequirementBlock(name="B", body="body b\n")

        assert render_main_spec(document) == (
            "## Requirements\n### Requirement: A\nbody a\n\n### Requirement: B\nbody b\n"
        )

    def test_new_block_on_preamble_only(self) -> None:
        document = MainDocument(preamble="## Requirements\n")
        document.requirements["A"] = RequirementBlock(name="A", body="body\n")

        assert render_main_spec(document) == "## Requirements\n\n### Requirement: A\nbody\n"

    def test_postamble_separated_after_new_block(self) -> None:
        document = MainDocument(preamble="## Requirements\n", postamble="## Notes\nx\n")
        document.requirements["A"] = RequirementBlock(name="A", body="body\n")

        assert render_main_spec(document).endswith("body\n\n## Notes\nx\n")
