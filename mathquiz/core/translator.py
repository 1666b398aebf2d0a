"""Translator callables used to turn message keys into display text."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from mathquiz.constants.messages import DEFAULT_MESSAGES

MessageParams = Mapping[str, "str | int | float"]
Translator = Callable[..., str]


def interpolate(template: str, params: MessageParams | None = None) -> str:
    """Replace every ``{{name}}`` placeholder with the matching parameter."""
    if not params:
        return template
    result = template
    for name, value in params.items():
        result = result.replace("{{" + name + "}}", str(value))
    return result


class MessageCatalog:
    """Translator backed by a flat ``key -> template`` mapping.

    Lookups fall back to the built-in English messages and finally to the key
    itself, so a missing translation never breaks the quiz.
    """

    def __init__(self, messages: Mapping[str, str] | None = None) -> None:
        self._messages: dict[str, str] = dict(DEFAULT_MESSAGES)
        if messages:
            self._messages.update(messages)

    def __call__(self, key: str, params: MessageParams | None = None) -> str:
        template = self._messages.get(key, key)
        return interpolate(template, params)

    def has_key(self, key: str) -> bool:
        return key in self._messages
