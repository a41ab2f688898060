"""Lookup over the closed set of document templates."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from ..models import TemplateDefinition
from .definitions import BUILTIN_TEMPLATES


class UnknownTemplateError(LookupError):
    """Raised when a template id is not registered; compilation cannot continue."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Unknown template: {template_id}")
        self.template_id = template_id


class TemplateRegistry:
    """Immutable, ordered catalog of templates keyed by id."""

    def __init__(self, templates: Iterable[TemplateDefinition] = BUILTIN_TEMPLATES) -> None:
        ordered: dict[str, TemplateDefinition] = {}
        for template in templates:
            if template.id in ordered:
                raise ValueError(f"Duplicate template id: {template.id}")
            ordered[template.id] = template
        if not ordered:
            raise ValueError("A template registry needs at least one template")
        self._templates: Mapping[str, TemplateDefinition] = MappingProxyType(ordered)

    def get(self, template_id: str) -> TemplateDefinition:
        try:
            return self._templates[template_id]
        except KeyError:
            raise UnknownTemplateError(template_id) from None

    def ids(self) -> List[str]:
        return list(self._templates)

    @property
    def default(self) -> TemplateDefinition:
        """First declared template, used when no keyword matches."""
        return next(iter(self._templates.values()))

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __iter__(self) -> Iterator[TemplateDefinition]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)


DEFAULT_REGISTRY = TemplateRegistry()


def get_template(template_id: str) -> TemplateDefinition:
    """Return a built-in template, raising ``UnknownTemplateError`` for unknown ids."""
    return DEFAULT_REGISTRY.get(template_id)


__all__ = ["DEFAULT_REGISTRY", "TemplateRegistry", "UnknownTemplateError", "get_template"]
