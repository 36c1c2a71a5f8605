"""Unit tests for question sets (dscc_gen.questions)."""

from __future__ import annotations

import pytest

from dscc_gen.config import AuthType, ProjectChoice, add_bucket_prefix
from dscc_gen.questions import (
    Choice,
    InputKind,
    Question,
    auth_type_choices,
    common_questions,
    connector_questions,
    get_auth_help_text,
    questions_for,
    viz_questions,
)

pytestmark = pytest.mark.unit


class TestAuthHelpText:
    @pytest.mark.parametrize(
        ("auth_type", "expected"),
        [
            (AuthType.NONE, "No authentication required."),
            (AuthType.KEY, "Key or Token"),
            (AuthType.OAUTH2, "Standard OAUTH2"),
            (AuthType.USER_PASS, "Username & Password"),
            (AuthType.USER_TOKEN, "Username & Token"),
        ],
    )
    def test_help_text(self, auth_type, expected):
        assert get_auth_help_text(auth_type) == expected

    def test_unknown_value_is_a_defect(self):
        with pytest.raises(AssertionError):
            get_auth_help_text("BASIC")

    def test_choices_follow_declaration_order(self):
        choices = auth_type_choices()
        assert [c.value for c in choices] == [a.value for a in AuthType]

    def test_choice_labels_are_padded(self):
        labels = [c.label for c in auth_type_choices()]
        assert labels == [
            "NONE       - No authentication required.",
            "OAUTH2     - Standard OAUTH2",
            "KEY        - Key or Token",
            "USER_PASS  - Username & Password",
            "USER_TOKEN - Username & Token",
        ]


class TestQuestionSets:
    def test_common_questions(self, base_path):
        questions = common_questions(base_path)
        assert [q.name for q in questions] == ["project_name"]
        assert questions[0].kind is InputKind.TEXT
        assert questions[0].validate is not None

    def test_viz_questions(self, base_path, settings):
        questions = viz_questions(base_path, settings)
        assert [q.name for q in questions] == ["project_name", "dev_bucket", "prod_bucket"]
        for question in questions[1:]:
            assert question.kind is InputKind.TEXT
            assert question.transformer is add_bucket_prefix
            assert question.validate is not None

    def test_connector_questions(self, base_path):
        questions = connector_questions(base_path)
        assert [q.name for q in questions] == ["project_name", "auth_type"]
        auth = questions[1]
        assert auth.kind is InputKind.LIST
        assert auth.message == "How will users authenticate to your service?"
        assert len(auth.choices) == 5

    def test_questions_for(self, base_path, settings):
        viz = questions_for(ProjectChoice.VIZ, base_path, settings)
        connector = questions_for(ProjectChoice.CONNECTOR, base_path, settings)
        assert viz[-1].name == "prod_bucket"
        assert connector[-1].name == "auth_type"

    def test_questions_for_unknown_choice(self, base_path, settings):
        with pytest.raises(AssertionError):
            questions_for("report", base_path, settings)

    async def test_project_name_question_validates(self, base_path):
        question = common_questions(base_path)[0]
        assert await question.check("ok_name") is True
        assert isinstance(await question.check("bad name"), str)


class TestQuestion:
    async def test_check_without_validator_accepts(self):
        question = Question(name="x", kind=InputKind.TEXT, message="X?")
        assert await question.check("") is True

    async def test_check_uses_validator(self):
        async def _only_yes(value: str) -> bool | str:
            return True if value == "yes" else "Say yes."

        question = Question(name="x", kind=InputKind.TEXT, message="X?", validate=_only_yes)
        assert await question.check("yes") is True
        assert await question.check("no") == "Say yes."

    def test_choice_is_immutable(self):
        choice = Choice(label="a", value="A")
        with pytest.raises(AttributeError):
            choice.value = "B"
