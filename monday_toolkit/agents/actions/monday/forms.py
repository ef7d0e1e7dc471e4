"""
monday.com WorkForms tools.

A form stores its responses as items of a board created along with it and is
addressed by the token found in its public URL
(``https://forms.monday.com/forms/<token>?r=use1``).
"""

import json
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ConfigDict, Field, TypeAdapter  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.boards import BoardKind
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.utils.stringified import fallback_to_stringified_version_if_null

logger = logging.getLogger(__name__)

FORM_TOKEN_DESCRIPTION = "The unique identifier token for the form. Required for all form-specific operations."


class FormQuestionType(str, Enum):
    BOOLEAN = "Boolean"
    CONNECTED_BOARDS = "ConnectedBoards"
    COUNTRY = "Country"
    DATE = "Date"
    DATE_RANGE = "DateRange"
    EMAIL = "Email"
    FILE = "File"
    LINK = "Link"
    LOCATION = "Location"
    LONG_TEXT = "LongText"
    MULTI_SELECT = "MultiSelect"
    NAME = "Name"
    NUMBER = "Number"
    PEOPLE = "People"
    PHONE = "Phone"
    RATING = "Rating"
    SHORT_TEXT = "ShortText"
    SIGNATURE = "Signature"
    SINGLE_SELECT = "SingleSelect"
    SUBITEMS = "Subitems"
    UPDATES = "Updates"


class SelectDisplay(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DROPDOWN = "dropdown"


class SelectOptionsOrder(str, Enum):
    ALPHABETICAL = "alphabetical"
    RANDOM = "random"
    CUSTOM = "custom"


class PrefillSource(str, Enum):
    ACCOUNT = "account"
    QUERY_PARAM = "queryParam"


class LayoutFormat(str, Enum):
    ONE_BY_ONE = "OneByOne"
    CLASSIC = "Classic"


class LayoutAlignment(str, Enum):
    FULL_LEFT = "FullLeft"
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"
    FULL_RIGHT = "FullRight"


class LayoutDirection(str, Enum):
    LTR = "LtR"
    RTL = "Rtl"


class BackgroundType(str, Enum):
    IMAGE = "Image"
    COLOR = "Color"
    NONE = "None"


class FontSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class LogoPosition(str, Enum):
    AUTO = "Auto"
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"


class LogoSize(str, Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "ExtraLarge"


class FormAction(str, Enum):
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    SHORTEN_FORM_URL = "shortenFormUrl"
    SET_FORM_PASSWORD = "setFormPassword"
    CREATE_TAG = "createTag"
    DELETE_TAG = "deleteTag"
    UPDATE_TAG = "updateTag"
    UPDATE_APPEARANCE = "updateAppearance"
    UPDATE_ACCESSIBILITY = "updateAccessibility"
    UPDATE_FEATURES = "updateFeatures"
    UPDATE_QUESTION_ORDER = "updateQuestionOrder"
    UPDATE_FORM_HEADER = "updateFormHeader"


class FormQuestionAction(str, Enum):
    DELETE = "delete"
    UPDATE = "update"
    CREATE = "create"


# Form settings patches. Every field is optional, only the ones sent are changed.


class Enabled(ToolInput):
    enabled: Optional[bool] = None


class Background(ToolInput):
    type: Optional[BackgroundType] = Field(default=None, description="String specifying background style.")
    value: Optional[str] = Field(
        default=None,
        description=(
            "String containing the background value. The value will depend on the background type. If the "
            "background type is color, the value will be a hex color code. If the background type is image, "
            "the value will be an image URL."
        ),
    )


class Layout(ToolInput):
    format: Optional[LayoutFormat] = Field(
        default=None,
        description="String specifying the form display format. Can be a step by step form or a classic one page form.",
    )
    alignment: Optional[LayoutAlignment] = Field(default=None, description="String controlling text and content alignment.")
    direction: Optional[LayoutDirection] = Field(default=None, description="String setting reading direction.")


class Logo(ToolInput):
    position: Optional[LogoPosition] = Field(default=None, description="Logo placement on the form header.")
    size: Optional[LogoSize] = Field(default=None, description="Size of the logo that appears on the header of the form.")


class ButtonText(ToolInput):
    text: Optional[str] = None


class Text(ToolInput):
    font: Optional[str] = Field(default=None, description="String specifying the font family used throughout the form.")
    color: Optional[str] = Field(default=None, description="Hex color code for the text color in the form.")
    size: Optional[FontSize] = Field(default=None, description="The base font size for form text.")


class FormAppearance(ToolInput):
    background: Optional[Background] = None
    hide_branding: Optional[bool] = Field(default=None, description="Boolean hiding monday branding from the form display.")
    layout: Optional[Layout] = None
    logo: Optional[Logo] = None
    primary_color: Optional[str] = Field(
        default=None, description="Hex color code for the primary theme color used throughout the form."
    )
    show_progress_bar: Optional[bool] = Field(
        default=None, description="Boolean displaying a progress indicator showing form completion progress bar."
    )
    submit_button: Optional[ButtonText] = Field(
        default=None, description="Custom text displayed on the form submission button."
    )
    text: Optional[Text] = None


class FormAccessibility(ToolInput):
    language: Optional[str] = Field(
        default=None,
        description='Language code for form localization and interface text (e.g., "en", "es", "fr").',
    )
    logo_alt_text: Optional[str] = Field(
        default=None, description="Alternative text description for the logo image for accessibility."
    )


class RedirectAfterSubmission(ToolInput):
    enabled: Optional[bool] = None
    redirect_url: Optional[str] = Field(
        default=None,
        description="The URL where users will be redirected after successfully submitting the form.",
    )


class AfterSubmissionView(ToolInput):
    allow_edit_submission: Optional[bool] = None
    allow_resubmit: Optional[bool] = None
    allow_view_submission: Optional[bool] = None
    description: Optional[str] = Field(default=None, description="Text shown to users after they complete the form.")
    redirect_after_submission: Optional[RedirectAfterSubmission] = None
    show_success_image: Optional[bool] = None
    title: Optional[str] = Field(
        default=None, description="Text displayed as the title after successful form submission."
    )


class CloseDate(ToolInput):
    enabled: Optional[bool] = None
    date: Optional[str] = Field(
        default=None, description="ISO timestamp when the form will automatically stop accepting responses."
    )


class MondaySettings(ToolInput):
    item_group_id: Optional[str] = Field(
        default=None, description="The board group ID where new items from form responses will be created."
    )
    include_name_question: Optional[bool] = None
    include_update_question: Optional[bool] = None
    sync_question_and_columns_titles: Optional[bool] = None


class PreSubmissionView(ToolInput):
    enabled: Optional[bool] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_button: Optional[ButtonText] = None


class RequireLogin(ToolInput):
    enabled: Optional[bool] = None
    redirect_to_login: Optional[bool] = None


class ResponseLimit(ToolInput):
    enabled: Optional[bool] = None
    limit: Optional[int] = Field(default=None, description="Integer specifying the maximum number of responses allowed.")


class FormFeatures(ToolInput):
    after_submission_view: Optional[AfterSubmissionView] = None
    close_date: Optional[CloseDate] = None
    draft_submission: Optional[Enabled] = None
    monday: Optional[MondaySettings] = None
    password: Optional[Enabled] = Field(
        default=None,
        description=(
            "Password protection can only be turned off here (enabled: false). To enable it use the "
            "setFormPassword action instead."
        ),
    )
    pre_submission_view: Optional[PreSubmissionView] = None
    re_captcha_challenge: Optional[bool] = None
    require_login: Optional[RequireLogin] = None
    response_limit: Optional[ResponseLimit] = None


class QuestionOrderEntry(ToolInput):
    id: str = Field(description="The unique identifier for the question.")


class FormPatch(ToolInput):
    appearance: Optional[FormAppearance] = Field(
        default=None,
        description=(
            "The appearance data to update. Acts as a patch object, meaning that only the fields that are "
            "provided will be updated. Required if the update action is updateAppearance."
        ),
    )
    accessibility: Optional[FormAccessibility] = Field(
        default=None,
        description=(
            "The accessibility data to update. Acts as a patch object, meaning that only the fields that are "
            "provided will be updated. Required if the update action is updateAccessibility."
        ),
    )
    features: Optional[FormFeatures] = Field(
        default=None,
        description=(
            "The features data to update. Acts as a patch object, meaning that only the fields that are "
            "provided will be updated. Required if the update action is updateFeatures."
        ),
    )
    title: Optional[str] = Field(
        default=None,
        description=(
            "The title text for the form. Must be at least 1 character long. Can only be updated if the "
            "update action is updateFormHeader."
        ),
    )
    description: Optional[str] = Field(
        default=None,
        description=(
            "Optional description text providing context about the form purpose. Can only be updated if the "
            "update action is updateFormHeader."
        ),
    )
    questions: Optional[List[QuestionOrderEntry]] = Field(
        default=None,
        description=(
            "Ordered array of dehydrated questions, object only including each question ID, for reordering. "
            "Must include all existing question IDs. Required if the update action is updateQuestionOrder."
        ),
    )


class FormTag(ToolInput):
    id: Optional[str] = Field(
        default=None,
        description=(
            "The unique identifier for the tag. This will get auto generated when creating a tag and can't be "
            "updated. This is required when updating or deleting a tag."
        ),
    )
    name: Optional[str] = Field(
        default=None,
        description="The name of the tag. This can only be created, not updated. This is required when creating a tag.",
    )
    value: Optional[str] = Field(
        default=None, description="The value of the tag. This value is required when creating or updating a tag."
    )
    column_id: Optional[str] = Field(
        default=None,
        description=(
            "The ID of the column this tag is associated with. This will get auto generated when creating a "
            "tag and can't be updated."
        ),
    )


class PrefixPredefined(ToolInput):
    enabled: bool
    prefix: Optional[str] = Field(
        default=None,
        description='The predefined phone country prefix in capital letters (e.g., "US", "UK", "IL").',
    )


class Prefill(ToolInput):
    enabled: bool
    lookup: Optional[str] = Field(
        default=None,
        description=(
            'The field to look up in the prefill source: a user property like "name" or "email" for account '
            "sources, the URL parameter name for query parameters."
        ),
    )
    source: Optional[PrefillSource] = None


class QuestionSettings(ToolInput):
    checked_by_default: Optional[bool] = Field(
        default=None, description="Boolean/checkbox questions only: Whether the checkbox is checked by default."
    )
    default_current_date: Optional[bool] = Field(
        default=None, description="Date based questions only: Set the current date as the default value."
    )
    display: Optional[SelectDisplay] = Field(
        default=None, description="Single/Multi Select questions only: How the selection options are presented."
    )
    include_time: Optional[bool] = Field(
        default=None, description="Date questions only: Whether to include time selection in addition to the date."
    )
    location_autofilled: Optional[bool] = Field(
        default=None, description="Location questions only: Fill the user's current location automatically."
    )
    options_order: Optional[SelectOptionsOrder] = Field(
        default=None, description="Single/Multi Select questions only: Determines the ordering of selection options."
    )
    prefix_autofilled: Optional[bool] = Field(
        default=None, description="Phone questions only: Detect and fill the phone country prefix automatically."
    )
    prefix_predefined: Optional[PrefixPredefined] = None
    skip_validation: Optional[bool] = Field(
        default=None, description="Link/URL questions only: Whether to skip URL format validation."
    )
    prefill: Optional[Prefill] = None


class QuestionOption(ToolInput):
    label: str = Field(description="The display text for individual option choices in select-type questions.")


class FormQuestion(ToolInput):
    type: FormQuestionType = Field(description="The question type determining input behavior and validation.")
    title: Optional[str] = Field(
        default=None,
        description=(
            "The question text displayed to respondents. Must be at least 1 character long and clearly "
            "indicate the expected response."
        ),
    )
    description: Optional[str] = Field(
        default=None,
        description="Optional explanatory text providing additional context, instructions, or examples for the question.",
    )
    visible: Optional[bool] = Field(default=None, description="Boolean controlling question visibility to respondents.")
    required: Optional[bool] = Field(
        default=None, description="Boolean indicating if the question must be answered before form submission."
    )
    options: Optional[List[QuestionOption]] = Field(
        default=None,
        description=(
            "Array of option objects for choice-based questions. Required when creating select type questions. "
            "Can only be provided when creating a question, not yet supported for updating a question."
        ),
    )
    settings: Optional[QuestionSettings] = None


FORM_TAG = TypeAdapter(FormTag)
FORM_PATCH = TypeAdapter(FormPatch)
FORM_QUESTION = TypeAdapter(FormQuestion)


def to_graphql_input(model: ToolInput) -> Dict[str, Any]:
    """camelCase GraphQL input object holding only the fields that were set."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _dumps(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


class CreateFormInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    destination_workspace_id: MondayId = Field(description="The workspace in which the form will be created in.")
    destination_folder_id: Optional[MondayId] = Field(
        default=None, description="The folder in which the form will be created under."
    )
    destination_folder_name: Optional[str] = Field(
        default=None, description="The name of the folder in which the form will be created in."
    )
    board_kind: Optional[BoardKind] = Field(
        default=None, description="The board kind to create for the board in which the form will create items in."
    )
    destination_name: Optional[str] = Field(
        default=None, description="The name of the board that will be created to store the form responses in."
    )
    board_owner_ids: Optional[List[MondayId]] = Field(
        default=None,
        description="Array of user IDs who will have owner permissions on the board in which the form will create items in.",
    )
    board_owner_team_ids: Optional[List[MondayId]] = Field(
        default=None,
        description=(
            "Array of team IDs whose members will have owner permissions on the board in which the form will "
            "create items in."
        ),
    )
    board_subscriber_ids: Optional[List[MondayId]] = Field(
        default=None,
        description=(
            "Array of user IDs who will receive notifications about board activity for the board in which the "
            "form will create items in."
        ),
    )
    board_subscriber_teams_ids: Optional[List[MondayId]] = Field(
        default=None,
        description=(
            "Array of team IDs whose members will receive notifications about board activity for the board in "
            "which the form will create items in."
        ),
    )


class GetFormInput(ToolInput):
    form_token: str = Field(description=FORM_TOKEN_DESCRIPTION)


class UpdateFormInput(ToolInput):
    form_token: str = Field(description=FORM_TOKEN_DESCRIPTION)
    action: FormAction = Field(
        description=(
            "The type of update action to perform on the form. Can be one of the following: "
            + ", ".join(action.value for action in FormAction)
            + "."
        )
    )
    form_password: Optional[str] = Field(
        default=None,
        description=(
            "Set a password on a form to restrict access. This will enable password protection for the form. "
            'Required for the action "setFormPassword" in the update form tool.'
        ),
    )
    tag: Optional[FormTag] = Field(
        default=None,
        description=(
            "The tag data to create, update or delete. If deleting a tag, only provide the id of the tag to "
            "delete. If creating a tag, provide the name and value, the id and columnId are auto generated. If "
            "updating a tag, provide the id and new value, name and columnId are not changeable."
        ),
    )
    tag_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The tag data. Send this as a stringified JSON of "tag" field. '
            'Read "tag" field description for details how to use it.'
        ),
    )
    form: Optional[FormPatch] = Field(
        default=None,
        description=(
            "The form data to update. Required if updating the appearance, accessibility, features, question "
            "order, or form header."
        ),
    )
    form_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The form data. Send this as a stringified JSON of "form" field. '
            'Read "form" field description for details how to use it.'
        ),
    )


class FormQuestionsEditorInput(ToolInput):
    action: FormQuestionAction = Field(
        description=(
            "The type of operation to perform on the question. Can delete, update, or create. When updating or "
            "deleting a question, the questionId is required. When creating or updating a question, the question "
            "object is required. When updating, the question is a patch object, meaning that only the fields "
            "that are provided will be updated."
        )
    )
    form_token: str = Field(description=FORM_TOKEN_DESCRIPTION)
    question_id: Optional[str] = Field(
        default=None,
        description="The unique identifier for the question. Used to target specific questions within a form.",
    )
    question: Optional[FormQuestion] = Field(
        default=None,
        description=(
            "The question object containing all properties for creation or update. When creating a question, "
            "the title is required."
        ),
    )
    question_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The question object. Send this as a stringified JSON of "question" '
            'field. Read "question" field description for details how to use it.'
        ),
    )


class MondayForms(MondayActions):
    """WorkForms tools: create forms, edit their settings and questions"""

    @tool(
        name="create_form",
        type=ToolType.WRITE,
        title="Create Form",
        description=(
            "Create a monday.com form. This will create a new form as well as a new board for which the form's "
            "responses will be stored. The returned board_id is the ID of the board that was created while the "
            "returned formToken can be used for all future queries and mutations to continue editing the form."
        ),
        input_model=CreateFormInput,
    )
    async def create_form(self, tool_input: CreateFormInput) -> str:
        board_kind = tool_input.board_kind
        res = await self.client.mutation(
            "create_form",
            {
                "destination_workspace_id": tool_input.destination_workspace_id,
                "destination_folder_id": tool_input.destination_folder_id,
                "destination_folder_name": tool_input.destination_folder_name,
                "board_kind": board_kind.value if board_kind else None,
                "destination_name": tool_input.destination_name,
                "board_owner_ids": tool_input.board_owner_ids,
                "board_owner_team_ids": tool_input.board_owner_team_ids,
                "board_subscriber_ids": tool_input.board_subscriber_ids,
                "board_subscriber_teams_ids": tool_input.board_subscriber_teams_ids,
            },
        )
        form = res.get("create_form") or {}
        return f"Form created successfully. Board ID: {form.get('boardId')}, Token: {form.get('token')}"

    @tool(
        name="get_form",
        type=ToolType.READ,
        title="Get Form",
        description=(
            "Get a monday.com form by its form token. Form tokens can be extracted from the form's url. Given a "
            "form url, such as https://forms.monday.com/forms/abc123def456ghi789?r=use1, the token is the "
            "alphanumeric string that appears right after /forms/ and before the ?. In the example, the token "
            "is abc123def456ghi789."
        ),
        input_model=GetFormInput,
        read_only=True,
    )
    async def get_form(self, tool_input: GetFormInput) -> str:
        res = await self.client.query("get_form", {"formToken": tool_input.form_token})
        form = res.get("form")
        if not form:
            return f"Form with token {tool_input.form_token} not found or you don't have access to it."
        return f"The form with the token {tool_input.form_token} is: {_dumps(form)}"

    @tool(
        name="update_form",
        type=ToolType.WRITE,
        title="Update Form",
        description=(
            'Update a monday.com form. Handles the following form update actions that can only be done one at '
            'a time using the correct "action" input: \n'
            '    - update form\'s feature settings with the action "updateFeatures",\n'
            '    - update form\'s appearance settings with the action "updateAppearance",\n'
            '    - update form\'s accessibility settings with the action "updateAccessibility",\n'
            '    - update form\'s title with the action "updateFormHeader",\n'
            '    - update form\'s description with the action "updateFormHeader",\n'
            '    - update form\'s question order with the action "updateQuestionOrder",\n'
            '    - create a new form tag with the action "createTag",\n'
            '    - delete a form tag with the action "deleteTag",\n'
            '    - update a form tag with the action "updateTag",\n'
            '    - set or update the form\'s password with the action "setFormPassword"\n'
            '    - shorten form\'s url with the action "shortenFormUrl"\n'
            '    - deactivate form with the action "deactivate"\n'
            '    - reactivate form with the action "activate"'
        ),
        input_model=UpdateFormInput,
        idempotent=True,
    )
    async def update_form(self, tool_input: UpdateFormInput) -> str:
        fallback_to_stringified_version_if_null(tool_input, "tag", FORM_TAG)
        fallback_to_stringified_version_if_null(tool_input, "form", FORM_PATCH)

        handlers: Dict[FormAction, Callable[[UpdateFormInput], Awaitable[str]]] = {
            FormAction.SET_FORM_PASSWORD: self._set_form_password,
            FormAction.SHORTEN_FORM_URL: self._shorten_form_url,
            FormAction.DEACTIVATE: self._deactivate_form,
            FormAction.ACTIVATE: self._activate_form,
            FormAction.CREATE_TAG: self._create_tag,
            FormAction.DELETE_TAG: self._delete_tag,
            FormAction.UPDATE_TAG: self._update_tag,
            FormAction.UPDATE_APPEARANCE: self._update_appearance,
            FormAction.UPDATE_ACCESSIBILITY: self._update_accessibility,
            FormAction.UPDATE_FEATURES: self._update_features,
            FormAction.UPDATE_QUESTION_ORDER: self._update_question_order,
            FormAction.UPDATE_FORM_HEADER: self._update_form_header,
        }
        return await handlers[tool_input.action](tool_input)

    async def _set_form_password(self, tool_input: UpdateFormInput) -> str:
        if not tool_input.form_password:
            return 'formPassword is required for the action "setFormPassword" in the update form tool.'
        await self.client.mutation(
            "set_form_password",
            {"formToken": tool_input.form_token, "input": {"password": tool_input.form_password}},
        )
        return "Form password successfully set."

    async def _shorten_form_url(self, tool_input: UpdateFormInput) -> str:
        await self.client.mutation("shorten_form_url", {"formToken": tool_input.form_token})
        return "Form URL successfully shortened."

    async def _deactivate_form(self, tool_input: UpdateFormInput) -> str:
        await self.client.mutation("deactivate_form", {"formToken": tool_input.form_token})
        return "Form successfully deactivated."

    async def _activate_form(self, tool_input: UpdateFormInput) -> str:
        await self.client.mutation("activate_form", {"formToken": tool_input.form_token})
        return "Form successfully activated."

    async def _create_tag(self, tool_input: UpdateFormInput) -> str:
        tag = tool_input.tag
        if not tag:
            return 'Tag is required for the action "createTag" in the update form tool.'
        if not tag.name:
            return 'Tag name is required for the action "createTag" in the update form tool.'

        tag_input: Dict[str, Any] = {"name": tag.name}
        if tag.value is not None:
            tag_input["value"] = tag.value
        res = await self.client.mutation(
            "create_form_tag", {"formToken": tool_input.form_token, "tag": tag_input}
        )
        return f"Tag successfully added: {_dumps(res.get('create_form_tag'))}"

    async def _delete_tag(self, tool_input: UpdateFormInput) -> str:
        tag = tool_input.tag
        if not tag:
            return 'Tag is required for the action "deleteTag" in the update form tool.'
        if not tag.id:
            return 'Tag id is required for the action "deleteTag" in the update form tool.'

        await self.client.mutation("delete_form_tag", {"formToken": tool_input.form_token, "tagId": tag.id})
        return f"Tag with id: {tag.id} successfully deleted."

    async def _update_tag(self, tool_input: UpdateFormInput) -> str:
        tag = tool_input.tag
        if not tag:
            return 'Tag is required for the action "updateTag" in the update form tool.'
        if not tag.id or not tag.value:
            return 'Tag id and value are required for the action "updateTag" in the update form tool.'

        res = await self.client.mutation(
            "update_form_tag",
            {"formToken": tool_input.form_token, "tagId": tag.id, "tag": {"value": tag.value}},
        )
        if not res.get("update_form_tag"):
            return f"Unable to update tag with id: {tag.id}."
        return f"Tag with id: {tag.id} successfully updated to value: {tag.value}."

    async def _update_appearance(self, tool_input: UpdateFormInput) -> str:
        appearance = tool_input.form.appearance if tool_input.form else None
        if not appearance:
            return 'Appearance is required for the action "updateAppearance" in the update form tool.'

        res = await self.client.mutation(
            "update_form_appearance",
            {"formToken": tool_input.form_token, "appearance": to_graphql_input(appearance)},
        )
        settings = res.get("update_form_settings") or {}
        return f"Appearance successfully updated: {_dumps(settings.get('appearance'))}"

    async def _update_accessibility(self, tool_input: UpdateFormInput) -> str:
        accessibility = tool_input.form.accessibility if tool_input.form else None
        if not accessibility:
            return 'Accessibility is required for the action "updateAccessibility" in the update form tool.'

        res = await self.client.mutation(
            "update_form_accessibility",
            {"formToken": tool_input.form_token, "accessibility": to_graphql_input(accessibility)},
        )
        settings = res.get("update_form_settings") or {}
        return f"Accessibility successfully updated: {_dumps(settings.get('accessibility'))}"

    async def _update_features(self, tool_input: UpdateFormInput) -> str:
        features = tool_input.form.features if tool_input.form else None
        if not features:
            return 'Features is required for the action "updateFeatures" in the update form tool.'

        res = await self.client.mutation(
            "update_form_features",
            {"formToken": tool_input.form_token, "features": to_graphql_input(features)},
        )
        settings = res.get("update_form_settings") or {}
        return f"Features successfully updated: {_dumps(settings.get('features'))}"

    async def _update_question_order(self, tool_input: UpdateFormInput) -> str:
        questions = tool_input.form.questions if tool_input.form else None
        if not questions:
            return (
                'List of dehydrated questions is required for the action "updateQuestionOrder" in the update '
                "form tool."
            )

        res = await self.client.mutation(
            "update_form_question_order",
            {"formToken": tool_input.form_token, "questions": [{"id": question.id} for question in questions]},
        )
        form = res.get("update_form") or {}
        return f"Question order successfully updated: {_dumps(form.get('questions'))}"

    async def _update_form_header(self, tool_input: UpdateFormInput) -> str:
        form = tool_input.form
        if not form or not (form.title or form.description):
            return 'Title or description is required for the action "updateFormHeader" in the update form tool.'

        res = await self.client.mutation(
            "update_form_header",
            {"formToken": tool_input.form_token, "title": form.title, "description": form.description},
        )
        return f"Form header content successfully updated: {_dumps(res.get('update_form'))}"

    @tool(
        name="form_questions_editor",
        type=ToolType.WRITE,
        title="Form Questions Editor",
        description="Create, update, or delete a question in a monday.com form",
        input_model=FormQuestionsEditorInput,
        destructive=True,
    )
    async def form_questions_editor(self, tool_input: FormQuestionsEditorInput) -> str:
        fallback_to_stringified_version_if_null(tool_input, "question", FORM_QUESTION)
        question_id = tool_input.question_id
        question = tool_input.question

        if tool_input.action == FormQuestionAction.DELETE:
            if not question_id:
                return "Question ID is required when deleting a question."
            await self.client.mutation(
                "delete_form_question", {"formToken": tool_input.form_token, "questionId": question_id}
            )
            return f"Form question with id {question_id} deleted successfully."

        if tool_input.action == FormQuestionAction.UPDATE:
            if not question_id:
                return "Question ID is required when updating a question."
            if not question:
                return "Must provide updated patch props for the question when updating."
            await self.client.mutation(
                "update_form_question",
                {
                    "formToken": tool_input.form_token,
                    "questionId": question_id,
                    "question": to_graphql_input(question),
                },
            )
            return f"Form question with id {question_id} updated successfully."

        if not question:
            return "Must provide a full question payload when creating a question."
        if not question.title:
            return "Must provide a title for the question when creating a question."
        res = await self.client.mutation(
            "create_form_question",
            {"formToken": tool_input.form_token, "question": to_graphql_input(question)},
        )
        created = res.get("create_form_question") or {}
        logger.debug(f"Created question {created.get('id')} on form {tool_input.form_token}")
        return f"Form question created successfully. ID: {created.get('id')}"
