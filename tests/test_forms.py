"""
WorkForms tool tests.
"""
import json

import pytest  # type: ignore

from monday_toolkit.agents.actions.monday.forms import MondayForms
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError

TOKEN = "abc123def456ghi789"


@pytest.mark.tools
class TestCreateAndGetForm:
    """Form creation and lookup by token."""

    @pytest.mark.asyncio
    async def test_create_form_sends_snake_case_arguments(self, monday_client, run_tool):
        monday_client.respond("createForm", {"create_form": {"boardId": "77", "token": TOKEN}})

        result = await run_tool(
            MondayForms,
            "create_form",
            {
                "destination_workspace_id": 12,
                "board_kind": "private",
                "destination_name": "Leads",
                "board_owner_ids": [1, "2"],
            },
        )

        assert result == f"Form created successfully. Board ID: 77, Token: {TOKEN}"
        assert monday_client.last("createForm").variables == {
            "destination_workspace_id": "12",
            "board_kind": "private",
            "destination_name": "Leads",
            "board_owner_ids": ["1", "2"],
        }

    @pytest.mark.asyncio
    async def test_get_form_not_found(self, monday_client, run_tool):
        monday_client.respond("getForm", {"form": None})

        result = await run_tool(MondayForms, "get_form", {"formToken": TOKEN})

        assert result == f"Form with token {TOKEN} not found or you don't have access to it."

    @pytest.mark.asyncio
    async def test_get_form_returns_form_json(self, monday_client, run_tool):
        form = {"id": 5, "token": TOKEN, "title": "Feedback", "questions": [{"id": "q1", "type": "ShortText"}]}
        monday_client.respond("getForm", {"form": form})

        result = await run_tool(MondayForms, "get_form", {"formToken": TOKEN})

        prefix = f"The form with the token {TOKEN} is: "
        assert result.startswith(prefix)
        assert json.loads(result[len(prefix):]) == form
        request = monday_client.last("getForm")
        assert request.variables == {"formToken": TOKEN}
        assert "fragment QuestionBasic on FormQuestion" in request.query


@pytest.mark.tools
class TestUpdateForm:
    """One update action per call."""

    @pytest.mark.asyncio
    async def test_set_password_requires_password(self, monday_client, run_tool):
        result = await run_tool(MondayForms, "update_form", {"formToken": TOKEN, "action": "setFormPassword"})

        assert result == 'formPassword is required for the action "setFormPassword" in the update form tool.'
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_set_password(self, monday_client, run_tool):
        result = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "setFormPassword", "formPassword": "s3cret"}
        )

        assert result == "Form password successfully set."
        assert monday_client.last("setFormPassword").variables == {
            "formToken": TOKEN,
            "input": {"password": "s3cret"},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "action, operation, message",
        [
            ("activate", "activateForm", "Form successfully activated."),
            ("deactivate", "deactivateForm", "Form successfully deactivated."),
            ("shortenFormUrl", "shortenFormUrl", "Form URL successfully shortened."),
        ],
    )
    async def test_token_only_actions(self, monday_client, run_tool, action, operation, message):
        result = await run_tool(MondayForms, "update_form", {"formToken": TOKEN, "action": action})

        assert result == message
        assert monday_client.operations() == [operation]
        assert monday_client.last(operation).variables == {"formToken": TOKEN}

    @pytest.mark.asyncio
    async def test_create_tag_from_stringified_tag(self, monday_client, run_tool):
        tag = {"id": "t1", "name": "utm_source", "value": "newsletter", "columnId": "text_1"}
        monday_client.respond("createFormTag", {"create_form_tag": tag})

        result = await run_tool(
            MondayForms,
            "update_form",
            {
                "formToken": TOKEN,
                "action": "createTag",
                "tagStringified": json.dumps({"tag": {"name": "utm_source", "value": "newsletter"}}),
            },
        )

        assert result == f"Tag successfully added: {json.dumps(tag, indent=2)}"
        assert monday_client.last("createFormTag").variables == {
            "formToken": TOKEN,
            "tag": {"name": "utm_source", "value": "newsletter"},
        }

    @pytest.mark.asyncio
    async def test_tag_checks(self, monday_client, run_tool):
        missing = await run_tool(MondayForms, "update_form", {"formToken": TOKEN, "action": "deleteTag"})
        no_name = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "createTag", "tag": {"value": "x"}}
        )
        no_value = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "updateTag", "tag": {"id": "t1"}}
        )

        assert missing == 'Tag is required for the action "deleteTag" in the update form tool.'
        assert no_name == 'Tag name is required for the action "createTag" in the update form tool.'
        assert no_value == 'Tag id and value are required for the action "updateTag" in the update form tool.'
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_update_and_delete_tag(self, monday_client, run_tool):
        monday_client.respond("updateFormTag", {"update_form_tag": True}, {"update_form_tag": None})
        arguments = {"formToken": TOKEN, "action": "updateTag", "tag": {"id": "t1", "value": "ads"}}

        updated = await run_tool(MondayForms, "update_form", arguments)
        failed = await run_tool(MondayForms, "update_form", arguments)
        deleted = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "deleteTag", "tag": {"id": "t1"}}
        )

        assert updated == "Tag with id: t1 successfully updated to value: ads."
        assert failed == "Unable to update tag with id: t1."
        assert deleted == "Tag with id: t1 successfully deleted."
        assert monday_client.last("updateFormTag").variables == {
            "formToken": TOKEN,
            "tagId": "t1",
            "tag": {"value": "ads"},
        }
        assert monday_client.last("deleteFormTag").variables == {"formToken": TOKEN, "tagId": "t1"}

    @pytest.mark.asyncio
    async def test_update_appearance_sends_only_given_fields(self, monday_client, run_tool):
        appearance = {"hideBranding": True, "layout": {"format": "Classic"}}
        monday_client.respond("updateFormAppearance", {"update_form_settings": {"appearance": appearance}})

        result = await run_tool(
            MondayForms,
            "update_form",
            {
                "formToken": TOKEN,
                "action": "updateAppearance",
                "form": {"appearance": {"hideBranding": True, "layout": {"format": "Classic"}}},
            },
        )

        assert result == f"Appearance successfully updated: {json.dumps(appearance, indent=2)}"
        assert monday_client.last("updateFormAppearance").variables == {
            "formToken": TOKEN,
            "appearance": {"hideBranding": True, "layout": {"format": "Classic"}},
        }

    @pytest.mark.asyncio
    async def test_update_features_nested_names(self, monday_client, run_tool):
        monday_client.respond("updateFormFeatures", {"update_form_settings": {"features": {}}})

        await run_tool(
            MondayForms,
            "update_form",
            {
                "formToken": TOKEN,
                "action": "updateFeatures",
                "form": {
                    "features": {
                        "reCaptchaChallenge": True,
                        "responseLimit": {"enabled": True, "limit": 10},
                        "afterSubmissionView": {"redirectAfterSubmission": {"redirectUrl": "https://x.io"}},
                    }
                },
            },
        )

        assert monday_client.last("updateFormFeatures").variables["features"] == {
            "reCaptchaChallenge": True,
            "responseLimit": {"enabled": True, "limit": 10},
            "afterSubmissionView": {"redirectAfterSubmission": {"redirectUrl": "https://x.io"}},
        }

    @pytest.mark.asyncio
    async def test_settings_actions_require_their_patch(self, monday_client, run_tool):
        accessibility = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "updateAccessibility", "form": {"title": "x"}}
        )
        header = await run_tool(MondayForms, "update_form", {"formToken": TOKEN, "action": "updateFormHeader"})
        order = await run_tool(MondayForms, "update_form", {"formToken": TOKEN, "action": "updateQuestionOrder"})

        assert accessibility == 'Accessibility is required for the action "updateAccessibility" in the update form tool.'
        assert header == 'Title or description is required for the action "updateFormHeader" in the update form tool.'
        assert order == (
            'List of dehydrated questions is required for the action "updateQuestionOrder" in the update form tool.'
        )
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_question_order_and_header(self, monday_client, run_tool):
        monday_client.respond("updateFormQuestionOrder", {"update_form": {"questions": [{"id": "b"}, {"id": "a"}]}})
        monday_client.respond("updateFormHeader", {"update_form": {"title": "New", "description": None}})

        order = await run_tool(
            MondayForms,
            "update_form",
            {"formToken": TOKEN, "action": "updateQuestionOrder", "form": {"questions": [{"id": "b"}, {"id": "a"}]}},
        )
        header = await run_tool(
            MondayForms, "update_form", {"formToken": TOKEN, "action": "updateFormHeader", "form": {"title": "New"}}
        )

        assert order.startswith("Question order successfully updated: ")
        assert monday_client.last("updateFormQuestionOrder").variables["questions"] == [{"id": "b"}, {"id": "a"}]
        assert header.startswith("Form header content successfully updated: ")
        assert monday_client.last("updateFormHeader").variables == {"formToken": TOKEN, "title": "New"}

    @pytest.mark.asyncio
    async def test_invalid_stringified_form(self, run_tool):
        with pytest.raises(ToolInputError, match="formStringified is not a valid JSON"):
            await run_tool(
                MondayForms,
                "update_form",
                {"formToken": TOKEN, "action": "updateFormHeader", "formStringified": "{title"},
            )


@pytest.mark.tools
class TestFormQuestionsEditor:
    """Create, update and delete form questions."""

    @pytest.mark.asyncio
    async def test_delete_requires_question_id(self, monday_client, run_tool):
        result = await run_tool(MondayForms, "form_questions_editor", {"action": "delete", "formToken": TOKEN})

        assert result == "Question ID is required when deleting a question."
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_delete(self, monday_client, run_tool):
        result = await run_tool(
            MondayForms, "form_questions_editor", {"action": "delete", "formToken": TOKEN, "questionId": "q1"}
        )

        assert result == "Form question with id q1 deleted successfully."
        assert monday_client.last("deleteFormQuestion").variables == {"formToken": TOKEN, "questionId": "q1"}

    @pytest.mark.asyncio
    async def test_update_requires_patch(self, run_tool):
        result = await run_tool(
            MondayForms, "form_questions_editor", {"action": "update", "formToken": TOKEN, "questionId": "q1"}
        )

        assert result == "Must provide updated patch props for the question when updating."

    @pytest.mark.asyncio
    async def test_update(self, monday_client, run_tool):
        result = await run_tool(
            MondayForms,
            "form_questions_editor",
            {
                "action": "update",
                "formToken": TOKEN,
                "questionId": "q1",
                "question": {"type": "Date", "required": True, "settings": {"includeTime": True}},
            },
        )

        assert result == "Form question with id q1 updated successfully."
        assert monday_client.last("updateFormQuestion").variables["question"] == {
            "type": "Date",
            "required": True,
            "settings": {"includeTime": True},
        }

    @pytest.mark.asyncio
    async def test_create_checks(self, run_tool):
        no_question = await run_tool(MondayForms, "form_questions_editor", {"action": "create", "formToken": TOKEN})
        no_title = await run_tool(
            MondayForms,
            "form_questions_editor",
            {"action": "create", "formToken": TOKEN, "question": {"type": "Email"}},
        )

        assert no_question == "Must provide a full question payload when creating a question."
        assert no_title == "Must provide a title for the question when creating a question."

    @pytest.mark.asyncio
    async def test_create_from_stringified_question(self, monday_client, run_tool):
        monday_client.respond("createFormQuestion", {"create_form_question": {"id": "q9"}})
        question = {
            "type": "SingleSelect",
            "title": "Team size",
            "options": [{"label": "1-10"}, {"label": "11+"}],
            "settings": {"display": "dropdown", "prefill": {"enabled": True, "source": "queryParam", "lookup": "size"}},
        }

        result = await run_tool(
            MondayForms,
            "form_questions_editor",
            {"action": "create", "formToken": TOKEN, "questionStringified": json.dumps(question)},
        )

        assert result == "Form question created successfully. ID: q9"
        assert monday_client.last("createFormQuestion").variables == {"formToken": TOKEN, "question": question}

    @pytest.mark.asyncio
    async def test_unknown_question_type(self, run_tool):
        with pytest.raises(ToolInputError, match="question.type"):
            await run_tool(
                MondayForms,
                "form_questions_editor",
                {"action": "create", "formToken": TOKEN, "question": {"type": "Essay", "title": "x"}},
            )
