"""
Merge engine - combines a catalog agent with its override record.
Pure: never mutates the base definition or the override.
"""

import logging
from typing import Optional

from agent_console.catalog.models import AgentDefinition
from agent_console.templates.parser import TemplateSyntaxError, build_template

from .models import OverrideRecord

logger = logging.getLogger(__name__)


def merge_override(base: AgentDefinition, override: Optional[OverrideRecord]) -> AgentDefinition:
    """Return the effective agent definition for ``base`` with ``override`` applied."""
    if override is None:
        return base

    updates = {f: getattr(override, f) for f in override.overridden_fields()}

    texts = override.action_texts()
    if texts and base.actions:
        actions = dict(base.actions)
        for action_key, text in texts.items():
            base_action = base.actions.get(action_key)
            if base_action is None:
                logger.debug(f"Ignoring override for unknown action {base.key}.{action_key}")
                continue
            try:
                rebuilt = build_template(text)
            except TemplateSyntaxError as e:
                logger.warning(
                    f"Stored override for {base.key}.{action_key} is invalid ({e}); "
                    f"serving the catalog template"
                )
                continue
            actions[action_key] = base_action.model_copy(update={"prompt_template": rebuilt})
        updates["actions"] = actions

    return base.model_copy(update=updates)
