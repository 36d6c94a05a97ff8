"""
Intent Classifier

Rule-based mapping from free request text to the Actions, subtask labels,
priority and permission tags of a Task. Rules are evaluated in a fixed
order against the lower-cased text; the first rule that claims an action
type wins, later rules for the same type only add their subtask label.

A classification with no actions means "respond conversationally, no
automation".
"""

from dataclasses import dataclass, field

import structlog

from yeticore.core.domain.models import Action, ActionType, TaskPriority

logger = structlog.get_logger()

CONVERSATIONAL_SUBTASK = "Provide conversational response"
DEFAULT_SECONDS_PER_ACTION = 30


@dataclass(frozen=True)
class IntentRule:
    """
    One keyword rule of the classifier.

    Attributes:
        keywords: Lower-case substrings; any hit makes the rule match
        action_type: Capability tag of the action the rule produces
        parameter_key: Parameter name under which the request text is passed
        subtask: Label appended to the task's subtasks on match
        permission: Permission tag required by the action
        priority: Optional escalation applied on match
    """

    keywords: tuple[str, ...]
    action_type: ActionType
    parameter_key: str
    subtask: str
    permission: str
    priority: TaskPriority | None = None

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)


DEFAULT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        keywords=("search", "find"),
        action_type=ActionType.WEB_SEARCH,
        parameter_key="query",
        subtask="Perform web search",
        permission="web_access",
    ),
    IntentRule(
        keywords=("image", "picture"),
        action_type=ActionType.IMAGE_GENERATION,
        parameter_key="prompt",
        subtask="Generate image",
        permission="image_generation",
    ),
    IntentRule(
        keywords=("video",),
        action_type=ActionType.VIDEO_GENERATION,
        parameter_key="prompt",
        subtask="Generate video",
        permission="video_generation",
        priority=TaskPriority.HIGH,
    ),
    IntentRule(
        keywords=("code", "program"),
        action_type=ActionType.CODE_DEPLOY,
        parameter_key="requirements",
        subtask="Analyze and generate code",
        permission="code_execution",
    ),
)


@dataclass
class Classification:
    """Output of the classifier, ready to be wrapped into a Task."""

    subtasks: list[str] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    priority: TaskPriority = TaskPriority.MEDIUM
    permissions: list[str] = field(default_factory=list)
    estimated_duration: int = 0


class IntentClassifier:
    """
    Deterministic keyword classifier.

    For fixed rules and input the output is order-stable: subtasks follow
    rule order, at most one Action is produced per action type, and
    priority starts at medium and is only ever escalated.
    """

    def __init__(
        self,
        rules: tuple[IntentRule, ...] | list[IntentRule] | None = None,
        seconds_per_action: int = DEFAULT_SECONDS_PER_ACTION,
    ):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self.seconds_per_action = seconds_per_action
        self.logger = logger.bind(component="intent_classifier")

    def classify(self, text: str) -> Classification:
        lowered = text.lower()
        result = Classification()
        seen_types: set[ActionType] = set()

        for rule in self.rules:
            if not rule.matches(lowered):
                continue
            result.subtasks.append(rule.subtask)
            if rule.action_type not in seen_types:
                seen_types.add(rule.action_type)
                result.actions.append(
                    Action(type=rule.action_type, parameters={rule.parameter_key: text})
                )
            if rule.permission not in result.permissions:
                result.permissions.append(rule.permission)
            if rule.priority is not None:
                result.priority = result.priority.escalate(rule.priority)

        if not result.actions:
            result.subtasks.append(CONVERSATIONAL_SUBTASK)

        result.estimated_duration = len(result.actions) * self.seconds_per_action

        self.logger.debug(
            "intent.classified",
            action_types=[a.type.value for a in result.actions],
            priority=result.priority.value,
        )
        return result
